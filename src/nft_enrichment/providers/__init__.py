"""Upstream data providers.

- IndexerProvider: NFT records from the ledger indexer (GraphQL)
- core: enrichment error taxonomy and HTTP error mapping
"""
from nft_enrichment.providers.core import ProviderErrorMapper
from nft_enrichment.providers.indexer import IndexerError, IndexerProvider

__all__ = ["IndexerError", "IndexerProvider", "ProviderErrorMapper"]
