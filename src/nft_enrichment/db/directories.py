"""SQL-backed user and category directories.

SQLModel sessions are synchronous; queries run in a worker thread so that
concurrent enrichment lookups do not block the event loop.
"""
import asyncio
from typing import Any

from sqlalchemy.engine import Engine
from sqlmodel import select

from nft_enrichment.db.models import Category, NftCategory, User
from nft_enrichment.db.sessions import get_session
from nft_enrichment.schemas import CategoryRecord, UserRecord


class SqlUserDirectory:
    """User lookup by wallet address."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _find_user(self, id_filter: dict[str, Any]) -> UserRecord | None:
        address = id_filter.get("id")
        if not address:
            return None
        with get_session(self._engine) as session:
            user = session.get(User, address)
            if user is None:
                return None
            return UserRecord(
                id=user.address,
                name=user.name,
                picture=user.picture,
                bio=user.bio,
                verified=user.verified,
            )

    async def find_user(self, id_filter: dict[str, Any]) -> UserRecord | None:
        return await asyncio.to_thread(self._find_user, id_filter)


class SqlCategoryDirectory:
    """Category lookup through the nft/category link table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _find_categories(self, nft_id: str) -> list[CategoryRecord] | None:
        statement = (
            select(Category)
            .join(NftCategory, NftCategory.category_code == Category.code)
            .where(NftCategory.nft_id == nft_id)
            .order_by(Category.code)
        )
        with get_session(self._engine) as session:
            rows = session.exec(statement).all()
            if not rows:
                return None
            return [
                CategoryRecord(code=c.code, name=c.name, description=c.description)
                for c in rows
            ]

    async def find_categories_from_id(self, nft_id: str) -> list[CategoryRecord] | None:
        return await asyncio.to_thread(self._find_categories, nft_id)
