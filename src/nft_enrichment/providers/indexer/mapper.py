"""Mapping from indexer GraphQL responses to NFT schemas."""
from typing import Any

from nft_enrichment.schemas import NFT, NFTFilter, NFTPage


def node_to_nft(node: dict[str, Any]) -> NFT:
    """Convert an `nftEntities` node to an NFT.

    The indexer names the content URI `nftIpfs` and the entity key `nftId`;
    both spellings are accepted.
    """
    return NFT(
        id=str(node.get("nftId") or node["id"]),
        serie_id=node.get("serieId") or "0",
        owner=node.get("owner"),
        creator=node.get("creator"),
        listed=node.get("listed") or 0,
        price=node.get("price") or "0",
        price_tiime=node.get("priceTiime") or "0",
        marketplace_id=node.get("marketplaceId"),
        uri=node.get("nftIpfs") or node.get("uri"),
    )


def connection_to_page(connection: dict[str, Any]) -> NFTPage:
    """Convert an `nftEntities` connection to an NFTPage."""
    nodes = connection.get("nodes") or []
    page_info = connection.get("pageInfo") or {}
    return NFTPage(
        data=[node_to_nft(node) for node in nodes],
        total_count=connection.get("totalCount", len(nodes)),
        has_next_page=bool(page_info.get("hasNextPage", False)),
    )


def filter_to_graphql(nft_filter: NFTFilter) -> dict[str, Any]:
    """Build an `NftEntityFilter` from the listing filters.

    `owner` and `marketplaceId` also narrow the listing here, on top of biasing
    the serie ranking; `noSeriesData` only affects enrichment and is not sent.
    """
    conditions: dict[str, Any] = {"timestampBurn": {"isNull": True}}
    if nft_filter.owner:
        conditions["owner"] = {"equalTo": nft_filter.owner}
    if nft_filter.creator:
        conditions["creator"] = {"equalTo": nft_filter.creator}
    if nft_filter.serie_id:
        conditions["serieId"] = {"equalTo": nft_filter.serie_id}
    if nft_filter.listed is not None:
        conditions["listed"] = {"equalTo": int(nft_filter.listed)}
    if nft_filter.marketplace_id is not None:
        conditions["marketplaceId"] = {"equalTo": str(nft_filter.marketplace_id)}
    return conditions
