"""Core provider abstractions: error taxonomy and HTTP error mapping."""
from nft_enrichment.providers.core.error_mapper import ProviderErrorMapper
from nft_enrichment.providers.core.exceptions import (AggregationFailure,
                                                      EnrichmentError,
                                                      FetchFailure,
                                                      IndexerError,
                                                      LookupFailure,
                                                      MalformedUriError)

__all__ = [
    "AggregationFailure",
    "EnrichmentError",
    "FetchFailure",
    "IndexerError",
    "LookupFailure",
    "MalformedUriError",
    "ProviderErrorMapper",
]
