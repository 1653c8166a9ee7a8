"""Database models for the NFT enrichment service.

Only directory data is persisted (users, categories). NFT records live on the
ledger and are read through the indexer; they are not stored in PostgreSQL.
"""
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """User profile keyed by wallet address."""

    address: str = Field(primary_key=True)
    name: str | None = None
    picture: str | None = None
    bio: str | None = None
    verified: bool = Field(default=False)


class Category(SQLModel, table=True):
    """Classification tag (e.g. art, gaming)."""

    code: str = Field(primary_key=True)
    name: str
    description: str | None = None


class NftCategory(SQLModel, table=True):
    """Links an NFT id to a category code."""

    nft_id: str = Field(primary_key=True, index=True)
    category_code: str = Field(primary_key=True, foreign_key="category.code")
