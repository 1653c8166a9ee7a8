"""Enrichment orchestrator: fans out to every source and merges one NFT view.

Each sub-operation reduces its own failures to a logged default (None, [] or
{}), so the gather below never sees an exception and `populate` never fails.
"""
import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from nft_enrichment.schemas import (NFT, CategoryRecord, NFTPage, NFTsQuery,
                                    SerieAggregation, UserRecord)
from nft_enrichment.services.categories import CategoryResolver
from nft_enrichment.services.identity import IdentityResolver
from nft_enrichment.services.metadata_fetcher import RemoteMetadataFetcher
from nft_enrichment.services.serie_aggregator import aggregate_serie
from nft_enrichment.services.uri_normalizer import IpfsUriNormalizer

SerieAggregator = Callable[[NFT, NFTPage, NFTsQuery], Awaitable[SerieAggregation | None]]


def merge_enrichment(
    nft: NFT,
    serie: SerieAggregation | None,
    creator: UserRecord | None,
    owner: UserRecord | None,
    info: dict[str, Any],
    categories: list[CategoryRecord],
) -> dict[str, Any]:
    """Build the composite record; later sources overwrite earlier keys."""
    return {
        **nft.to_json_dict(),
        **(serie.to_json_dict() if serie is not None else {}),
        "creatorData": creator.to_json_dict() if creator is not None else None,
        "ownerData": owner.to_json_dict() if owner is not None else None,
        **info,
        "categories": [c.to_json_dict() for c in categories],
    }


class NftEnrichmentService:
    """Assembles the denormalized view of an NFT from all enrichment sources."""

    def __init__(
        self,
        normalizer: IpfsUriNormalizer,
        identity: IdentityResolver,
        fetcher: RemoteMetadataFetcher,
        categories: CategoryResolver,
        serie_aggregator: SerieAggregator = aggregate_serie,
    ) -> None:
        self._normalizer = normalizer
        self._identity = identity
        self._fetcher = fetcher
        self._categories = categories
        self._aggregate_serie = serie_aggregator

    async def populate(
        self, nft: NFT, series: NFTPage, query: NFTsQuery
    ) -> dict[str, Any]:
        """Enrich one NFT.

        Args:
            nft: Raw ledger record (not mutated).
            series: Pre-loaded NFTs used to rank the NFT's serie.
            query: Filter context biasing the serie statistics.

        Returns:
            The composite record as a JSON-ready dict.
        """
        nft = self._normalizer.normalize_if_needed(nft)
        serie, creator, owner, info, categories = await asyncio.gather(
            self._aggregate_serie(nft, series, query),
            self._identity.resolve_creator(nft),
            self._identity.resolve_owner(nft),
            self._fetcher.fetch_nft_info(nft),
            self._categories.resolve_categories(nft),
        )
        return merge_enrichment(nft, serie, creator, owner, info, categories)

    async def populate_many(
        self, nfts: list[NFT], series: NFTPage, query: NFTsQuery
    ) -> list[dict[str, Any]]:
        """Enrich several NFTs concurrently; results keep the input order."""
        return list(
            await asyncio.gather(*(self.populate(nft, series, query) for nft in nfts))
        )
