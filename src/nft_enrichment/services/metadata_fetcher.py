"""Fetches an NFT's JSON document from IPFS and canonicalizes its media URLs."""
import asyncio
import logging
from typing import Any

import httpx

from nft_enrichment.config import DEFAULT_IPFS_REQUEST_TIMEOUT_MS
from nft_enrichment.providers.core import FetchFailure
from nft_enrichment.schemas import NFT
from nft_enrichment.services.uri_normalizer import IpfsUriNormalizer

logger = logging.getLogger(__name__)

IPFS_PATH_MARKER = "/ipfs"


class RemoteMetadataFetcher:
    """Retrieves the external descriptor referenced by `NFT.uri`.

    The HTTP client is shared and owned by the caller (see `close`). Each
    request is bounded by `timeout_ms`; a timeout is a failure, not retried.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        normalizer: IpfsUriNormalizer,
        timeout_ms: int = DEFAULT_IPFS_REQUEST_TIMEOUT_MS,
    ) -> None:
        self._client = client
        self._normalizer = normalizer
        self._timeout_s = timeout_ms / 1000

    async def _get_document(self, uri: str) -> Any:
        try:
            # One deadline for connect, headers and body together
            async with asyncio.timeout(self._timeout_s):
                response = await self._client.get(uri, timeout=None)
            response.raise_for_status()
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("fetch error: timed out fetching %s", uri)
            raise FetchFailure(uri, "timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("fetch error: %s", exc)
            raise FetchFailure(uri, str(exc)) from exc
        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailure(uri, "response is not JSON") from exc

    def _rewrite_media(self, info: dict[str, Any]) -> dict[str, Any]:
        media_url: str = info["media"]["url"]
        crypted_url: str = info["cryptedMedia"]["url"]
        if IPFS_PATH_MARKER in media_url and not self._normalizer.is_canonical(media_url):
            info["media"]["url"] = self._normalizer.canonicalize(media_url)
        # cryptedMedia is always rewritten, whatever its path looks like.
        if not self._normalizer.is_canonical(crypted_url):
            info["cryptedMedia"]["url"] = self._normalizer.canonicalize(crypted_url)
        return info

    async def fetch_nft_info(self, nft: NFT) -> dict[str, Any]:
        """Return the NFT's parsed IPFS document with canonical media URLs.

        Never raises: any fetch, parse or shape failure yields {}.
        """
        if not nft.uri:
            return {}
        try:
            info = await self._get_document(nft.uri)
            return self._rewrite_media(info)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("invalid NFT uri for %s: %s", nft.id, exc)
            return {}

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
