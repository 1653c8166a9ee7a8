"""Rewrites IPFS URIs so they point at the canonical gateway."""
import logging
import re
from dataclasses import dataclass

from nft_enrichment.config import DEFAULT_IPFS_GATEWAY
from nft_enrichment.providers.core import MalformedUriError
from nft_enrichment.schemas import NFT

logger = logging.getLogger(__name__)

# <scheme>://<host-path>/ then <identifier> (final, non-empty path segment)
_GATEWAY_URI = re.compile(r"^(https?://.*/)([^/]+)$")


def extract_identifier(uri: str) -> str:
    """Return the content identifier (last path segment) of a gateway URI.

    Raises:
        MalformedUriError: If the URI has no scheme or no final segment.
    """
    match = _GATEWAY_URI.match(uri or "")
    if match is None:
        raise MalformedUriError(uri)
    return match.group(2)


@dataclass(frozen=True)
class IpfsUriNormalizer:
    """Canonicalizes IPFS URIs against a fixed gateway base."""

    gateway_base: str = DEFAULT_IPFS_GATEWAY

    def is_canonical(self, uri: str) -> bool:
        return self.gateway_base in uri

    def extract_identifier(self, uri: str) -> str:
        return extract_identifier(uri)

    def canonicalize(self, uri: str) -> str:
        """Rewrite `uri` as `<gateway_base>/<identifier>`.

        Raises:
            MalformedUriError: If the identifier cannot be extracted.
        """
        return f"{self.gateway_base}/{self.extract_identifier(uri)}"

    def normalize_if_needed(self, nft: NFT) -> NFT:
        """Return a copy of `nft` whose `uri` points at the canonical gateway.

        Best effort: on failure the NFT is returned unchanged.
        """
        try:
            if nft.uri and not self.is_canonical(nft.uri):
                return nft.model_copy(update={"uri": self.canonicalize(nft.uri)})
            return nft
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Can't parse raw nft %s: %s", nft.id, exc)
            return nft
