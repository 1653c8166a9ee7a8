"""NFT listing and detail routes; every record is returned enriched."""
import logging
from typing import Any

import httpx
from dependency_injector.wiring import inject
from fastapi import APIRouter, Query

from nft_enrichment.container import (EnrichmentServiceDep, ErrorMapperDep,
                                      IndexerDep)
from nft_enrichment.providers.core.exceptions import IndexerError
from nft_enrichment.schemas import CompleteNFTPage, NFTFilter, NFTsQuery

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/NFTs", tags=["NFTs"])

# Indexer failures map to HTTP; enrichment failures never reach this layer.
_INDEXER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    IndexerError,
    httpx.HTTPError,
)


@router.get("", response_model=CompleteNFTPage, response_model_by_alias=True)
@inject
async def list_nfts(
    indexer: IndexerDep,
    enrichment: EnrichmentServiceDep,
    error_mapper: ErrorMapperDep,
    marketplace_id: int | None = Query(default=None, alias="marketplaceId"),
    owner: str | None = Query(default=None),
    creator: str | None = Query(default=None),
    listed: bool | None = Query(default=None),
    serie_id: str | None = Query(default=None, alias="serieId"),
    no_series_data: bool = Query(default=False, alias="noSeriesData"),
    first: int = Query(default=50, ge=1, le=500),
) -> CompleteNFTPage:
    """List NFTs matching the filters, each enriched with serie, user, IPFS and category data."""
    query = NFTsQuery(
        filter=NFTFilter(
            marketplace_id=marketplace_id,
            owner=owner,
            creator=creator,
            listed=listed,
            serie_id=serie_id,
            no_series_data=no_series_data,
        )
    )
    try:
        page = await indexer.get_nfts(query, first=first)
        series = await indexer.get_series([nft.serie_id for nft in page.data])
    except _INDEXER_EXCEPTIONS as e:
        logger.warning("NFT listing failed: %s", e)
        error_mapper.raise_http(e)
    data = await enrichment.populate_many(page.data, series, query)
    return CompleteNFTPage(
        data=data, total_count=page.total_count, has_next_page=page.has_next_page
    )


@router.get("/{nft_id}")
@inject
async def get_nft(
    nft_id: str,
    indexer: IndexerDep,
    enrichment: EnrichmentServiceDep,
    error_mapper: ErrorMapperDep,
    marketplace_id: int | None = Query(default=None, alias="marketplaceId"),
    owner: str | None = Query(default=None),
    no_series_data: bool = Query(default=False, alias="noSeriesData"),
) -> dict[str, Any]:
    """Get one NFT by id, enriched."""
    query = NFTsQuery(
        filter=NFTFilter(
            marketplace_id=marketplace_id, owner=owner, no_series_data=no_series_data
        )
    )
    try:
        nft = await indexer.get_nft(nft_id)
        series = await indexer.get_series([nft.serie_id])
    except _INDEXER_EXCEPTIONS as e:
        logger.warning("NFT %s lookup failed: %s", nft_id, e)
        error_mapper.raise_http(e, identifier=nft_id)
    return await enrichment.populate(nft, series, query)
