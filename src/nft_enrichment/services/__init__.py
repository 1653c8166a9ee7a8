"""Service layer: the NFT enrichment pipeline and its components."""
from nft_enrichment.services.categories import CategoryResolver
from nft_enrichment.services.enrichment import NftEnrichmentService
from nft_enrichment.services.identity import IdentityResolver
from nft_enrichment.services.metadata_fetcher import RemoteMetadataFetcher
from nft_enrichment.services.serie_aggregator import aggregate_serie, rank_serie
from nft_enrichment.services.uri_normalizer import (IpfsUriNormalizer,
                                                   extract_identifier)

__all__ = [
    "CategoryResolver",
    "IdentityResolver",
    "IpfsUriNormalizer",
    "NftEnrichmentService",
    "RemoteMetadataFetcher",
    "aggregate_serie",
    "extract_identifier",
    "rank_serie",
]
