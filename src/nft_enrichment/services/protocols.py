"""Protocols for the directories the enrichment pipeline consumes."""
from typing import Any, Protocol

from nft_enrichment.schemas import CategoryRecord, UserRecord


class UserDirectory(Protocol):
    """Resolves user records by ledger identifier (wallet address)."""

    async def find_user(self, id_filter: dict[str, Any]) -> UserRecord | None:
        """Return the matching user, or None when there is no such user."""
        ...


class CategoryDirectory(Protocol):
    """Resolves classification tags attached to an NFT."""

    async def find_categories_from_id(self, nft_id: str) -> list[CategoryRecord] | None:
        """Return the NFT's categories, or None when it has none."""
        ...
