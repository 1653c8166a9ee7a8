"""Ranks the NFTs of a serie and derives listing/ownership statistics."""
import logging
from decimal import Decimal, InvalidOperation

from nft_enrichment.providers.core import AggregationFailure
from nft_enrichment.schemas import (NFT, NFTPage, NFTsQuery, SerieAggregation,
                                    SerieSummary)
from nft_enrichment.utils import to_decimal

logger = logging.getLogger(__name__)


def _matches_marketplace(nft: NFT, marketplace_id: int) -> bool:
    if nft.marketplace_id is None:
        return False
    try:
        return int(nft.marketplace_id) == marketplace_id
    except ValueError:
        return False


def _rank_key(
    nft: NFT, marketplace_id: int | None
) -> tuple[int, int, Decimal, Decimal]:
    """Sort key: listed first, filter marketplace first, then cheapest."""
    marketplace_rank = 0
    if marketplace_id and not _matches_marketplace(nft, marketplace_id):
        marketplace_rank = 1
    return (
        -nft.listed,
        marketplace_rank,
        to_decimal(nft.price),
        to_decimal(nft.price_tiime),
    )


def rank_serie(nfts: list[NFT], marketplace_id: int | None = None) -> list[NFT]:
    """Return `nfts` ordered for display; the input list is left untouched.

    Raises:
        AggregationFailure: If a price cannot be compared numerically.
    """
    try:
        return sorted(nfts, key=lambda nft: _rank_key(nft, marketplace_id))
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise AggregationFailure(f"Cannot rank serie: {exc!r}") from exc


def _unique_aggregation(nft: NFT) -> SerieAggregation:
    return SerieAggregation(
        serie_data=[SerieSummary.from_nft(nft)],
        total_nft=1,
        total_listed_nft=nft.listed,
        total_listed_in_marketplace=nft.listed,
        total_owned_by_requesting_user=1,
        total_owned_listed_by_requesting_user=nft.listed,
        smallest_price=nft.price,
        smallest_price_tiime=nft.price_tiime,
    )


def _serie_aggregation(
    nft: NFT, series: NFTPage, query: NFTsQuery
) -> SerieAggregation:
    marketplace_id = query.filter.marketplace_id
    owner = query.filter.owner

    peers = [x for x in series.data if x.serie_id == nft.serie_id]
    ranked = rank_serie(peers, marketplace_id)
    listed = [x for x in ranked if x.listed]

    if marketplace_id:
        listed_in_marketplace = sum(
            1 for x in listed if _matches_marketplace(x, marketplace_id)
        )
    else:
        listed_in_marketplace = len(listed)

    # First of the listed-first ranking, not the minimum over the whole serie.
    cheapest = ranked[0] if ranked else nft

    return SerieAggregation(
        serie_data=[] if query.filter.no_series_data else [SerieSummary.from_nft(x) for x in ranked],
        total_nft=len(ranked),
        total_listed_nft=len(listed),
        total_listed_in_marketplace=listed_in_marketplace,
        total_owned_by_requesting_user=sum(1 for x in ranked if x.owner == owner) if owner else 0,
        total_owned_listed_by_requesting_user=sum(1 for x in listed if x.owner == owner) if owner else 0,
        smallest_price=cheapest.price,
        smallest_price_tiime=cheapest.price_tiime,
    )


async def aggregate_serie(
    nft: NFT, series: NFTPage, query: NFTsQuery
) -> SerieAggregation | None:
    """Compute the serie ranking and statistics for `nft`.

    Args:
        nft: The NFT being enriched.
        series: Pre-loaded NFTs; may include other series, which are ignored.
        query: Marketplace/owner filters that bias the ranking and counts.

    Returns:
        The aggregation, or None when it cannot be computed (logged).
    """
    try:
        if nft.is_unique:
            return _unique_aggregation(nft)
        return _serie_aggregation(nft, series, query)
    except Exception as exc:  # pylint: disable=broad-except
        logger.error("NFTs with same serie as %s could not be aggregated: %s", nft.id, exc)
        return None
