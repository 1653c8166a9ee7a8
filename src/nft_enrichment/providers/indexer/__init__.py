"""Ledger indexer provider (GraphQL)."""
from nft_enrichment.providers.core.exceptions import IndexerError
from nft_enrichment.providers.indexer.provider import IndexerProvider

__all__ = ["IndexerError", "IndexerProvider"]
