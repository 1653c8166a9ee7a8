"""Resolves the categories attached to an NFT."""
import logging

from nft_enrichment.schemas import NFT, CategoryRecord
from nft_enrichment.services.protocols import CategoryDirectory

logger = logging.getLogger(__name__)


class CategoryResolver:
    """Wraps the category directory; missing or failed lookups yield []."""

    def __init__(self, directory: CategoryDirectory) -> None:
        self._directory = directory

    async def resolve_categories(self, nft: NFT) -> list[CategoryRecord]:
        try:
            categories = await self._directory.find_categories_from_id(nft.id)
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error retrieving categories for NFT %s: %s", nft.id, exc)
            return []
        return list(categories) if categories else []
