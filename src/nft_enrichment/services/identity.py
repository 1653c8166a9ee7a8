"""Resolves NFT creator/owner addresses to user records."""
import logging

from nft_enrichment.providers.core import LookupFailure
from nft_enrichment.schemas import NFT, UserRecord
from nft_enrichment.services.protocols import UserDirectory

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Looks up creator and owner in the user directory; never raises."""

    def __init__(self, directory: UserDirectory) -> None:
        self._directory = directory

    async def _resolve(self, address: str | None, role: str) -> UserRecord | None:
        if not address:
            return None
        try:
            return await self._directory.find_user({"id": address})
        except Exception as exc:  # pylint: disable=broad-except
            failure = LookupFailure(f"NFT {role} {address} could not be resolved: {exc}")
            logger.warning("%s", failure)
            return None

    async def resolve_creator(self, nft: NFT) -> UserRecord | None:
        return await self._resolve(nft.creator, "creator")

    async def resolve_owner(self, nft: NFT) -> UserRecord | None:
        return await self._resolve(nft.owner, "owner")
