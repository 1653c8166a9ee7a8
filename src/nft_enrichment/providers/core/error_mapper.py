"""Maps indexer exceptions to HTTP responses."""
import asyncio
from dataclasses import dataclass

import httpx
from fastapi import HTTPException

from nft_enrichment.providers.core.exceptions import IndexerError


@dataclass(frozen=True)
class ProviderErrorMapper:
    """Maps provider/backend exceptions to HTTP (status_code, detail).

    Only the HTTP layer uses this: enrichment failures never get here, but a
    failed indexer request means there is nothing to enrich.
    """

    resource_name: str = "Resource"
    api_name: str = "API"

    def _not_found(self, identifier: str | None) -> str:
        if identifier is None:
            return f"{self.resource_name} not found"
        return f"{self.resource_name} '{identifier}' not found"

    def to_http(
        self,
        exc: Exception,
        identifier: str | None = None,
    ) -> tuple[int, str]:
        """Map a provider exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by the provider or service.
            identifier: Optional identifier to include in detail (e.g. an NFT id).

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, ValueError):
            detail = str(exc) or self._not_found(identifier)
            if identifier is not None and "not found" in detail.lower():
                detail = self._not_found(identifier)
            return (404, detail)
        if isinstance(exc, httpx.HTTPStatusError):
            status = exc.response.status_code
            if status == 404:
                return (404, self._not_found(identifier))
            if status >= 500:
                return (502, f"{self.api_name} error")
            return (status, f"{self.api_name} error")
        if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
            detail = "Request timed out"
            if identifier is not None:
                detail = f"Request to {self.api_name} timed out for '{identifier}'"
            return (504, detail)
        if isinstance(exc, IndexerError):
            return (502, f"{self.api_name} error")
        if isinstance(exc, httpx.TransportError):
            return (502, f"{self.api_name} unreachable")
        if isinstance(exc, (KeyError, TypeError)):
            return (404, self._not_found(identifier))
        return (500, "Internal server error")

    def raise_http(
        self,
        exc: Exception,
        identifier: str | None = None,
    ) -> None:
        """Map provider exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc, identifier=identifier)
        raise HTTPException(status_code=status_code, detail=detail) from exc
