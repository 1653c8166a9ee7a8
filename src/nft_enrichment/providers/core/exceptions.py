"""Error taxonomy for the enrichment pipeline.

Every enrichment component catches these at its own boundary and returns a
safe default; none of them reach the orchestrator's caller.
"""


class EnrichmentError(Exception):
    """Base class for enrichment failures."""


class MalformedUriError(EnrichmentError, ValueError):
    """URI does not have the `<scheme>://<path>/<identifier>` shape."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Invalid IPFS hash given: {uri}")
        self.uri = uri


class LookupFailure(EnrichmentError):
    """A user or category directory lookup failed."""


class FetchFailure(EnrichmentError):
    """The remote NFT document could not be retrieved or parsed."""

    def __init__(self, uri: str | None, reason: str = "") -> None:
        message = f"Could not retrieve NFT data from {uri}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.uri = uri


class AggregationFailure(EnrichmentError):
    """Serie statistics could not be computed (e.g. non-numeric prices)."""


class IndexerError(RuntimeError):
    """The ledger indexer answered with GraphQL errors."""
