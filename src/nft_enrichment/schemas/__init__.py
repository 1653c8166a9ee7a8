"""Pydantic schemas for API and runtime use. Not persisted to DB.

Field names are snake_case in Python and camelCase on the wire (`serieId`,
`priceTiime`, `marketplaceId`, ...), matching the ledger indexer.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNIQUE_SERIE_ID = "0"


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases; accepts either naming."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict using wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True)


class MediaInfo(CamelModel):
    """Media location as found in the NFT's IPFS document."""

    url: str | None = None


class NFT(CamelModel):
    """NFT record as recorded on the ledger. Treated as immutable."""

    id: str
    serie_id: str = UNIQUE_SERIE_ID
    owner: str | None = None
    creator: str | None = None
    listed: int = 0  # 0/1; the indexer also sends booleans
    price: str = "0"  # decimal as string
    price_tiime: str = "0"
    marketplace_id: str | None = None
    uri: str | None = None
    media: MediaInfo | None = None
    crypted_media: MediaInfo | None = None

    @field_validator("listed", mode="before")
    @classmethod
    def listed_as_count(cls, v):
        if isinstance(v, bool):
            return int(v)
        return v

    @field_validator("serie_id", "marketplace_id", mode="before")
    @classmethod
    def id_as_string(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

    @property
    def is_unique(self) -> bool:
        return self.serie_id == UNIQUE_SERIE_ID


class NFTPage(CamelModel):
    """A set of NFT records as returned by the indexer (e.g. a series snapshot)."""

    data: list[NFT] = Field(default_factory=list)
    total_count: int = 0
    has_next_page: bool = False


class NFTFilter(CamelModel):
    """Filters for listing NFTs; marketplace and owner also bias serie ranking."""

    marketplace_id: int | None = None
    owner: str | None = None
    creator: str | None = None
    listed: bool | None = None
    serie_id: str | None = None
    no_series_data: bool = False


class NFTsQuery(CamelModel):
    """Query context handed to the enrichment pipeline."""

    filter: NFTFilter = Field(default_factory=NFTFilter)


class SerieSummary(CamelModel):
    """Peer entry in a serie ranking."""

    id: str
    owner: str | None = None
    listed: int = 0
    price: str = "0"
    price_tiime: str = "0"
    marketplace_id: str | None = None

    @classmethod
    def from_nft(cls, nft: NFT) -> "SerieSummary":
        return cls(
            id=nft.id,
            owner=nft.owner,
            listed=nft.listed,
            price=nft.price,
            price_tiime=nft.price_tiime,
            marketplace_id=nft.marketplace_id,
        )


class SerieAggregation(CamelModel):
    """Ranked serie peers and the statistics derived from them."""

    serie_data: list[SerieSummary] = Field(default_factory=list)
    total_nft: int = 0
    total_listed_nft: int = 0
    total_listed_in_marketplace: int = 0
    total_owned_by_requesting_user: int = 0
    total_owned_listed_by_requesting_user: int = 0
    smallest_price: str = "0"
    smallest_price_tiime: str = "0"


class UserRecord(CamelModel):
    """User directory entry keyed by wallet address."""

    id: str  # wallet address
    name: str | None = None
    picture: str | None = None
    bio: str | None = None
    verified: bool = False


class CategoryRecord(CamelModel):
    """Classification tag attached to an NFT."""

    code: str
    name: str
    description: str | None = None


class CompleteNFTPage(CamelModel):
    """Listing response: enriched NFT records plus indexer paging info."""

    data: list[dict[str, Any]] = Field(default_factory=list)
    total_count: int = 0
    has_next_page: bool = False


__all__ = [
    "UNIQUE_SERIE_ID",
    "CategoryRecord",
    "CompleteNFTPage",
    "MediaInfo",
    "NFT",
    "NFTFilter",
    "NFTPage",
    "NFTsQuery",
    "SerieAggregation",
    "SerieSummary",
    "UserRecord",
]
