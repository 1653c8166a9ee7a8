"""Ledger indexer provider: reads NFT records over GraphQL."""
import logging
from typing import Any

import httpx

from nft_enrichment.providers.core.exceptions import IndexerError
from nft_enrichment.providers.indexer.mapper import (connection_to_page,
                                                     filter_to_graphql,
                                                     node_to_nft)
from nft_enrichment.schemas import NFT, NFTPage, NFTsQuery

logger = logging.getLogger(__name__)

NFT_FIELDS = """
    nftId
    owner
    creator
    listed
    timestampList
    isCapsule
    isInBlacklist
    nftIpfs
    capsuleIpfs
    serieId
    price
    priceTiime
    marketplaceId
"""

NFTS_QUERY = f"""
query nftEntities($filter: NftEntityFilter, $first: Int) {{
  nftEntities(filter: $filter, first: $first, orderBy: CREATED_AT_DESC) {{
    totalCount
    pageInfo {{ hasNextPage }}
    nodes {{ {NFT_FIELDS} }}
  }}
}}
"""

NFT_QUERY = f"""
query nftEntity($id: String!) {{
  nftEntities(filter: {{ nftId: {{ equalTo: $id }}, timestampBurn: {{ isNull: true }} }}) {{
    nodes {{ {NFT_FIELDS} }}
  }}
}}
"""

SERIES_QUERY = f"""
query series($serieIds: [String!], $first: Int, $after: Cursor) {{
  nftEntities(
    filter: {{ serieId: {{ in: $serieIds }}, timestampBurn: {{ isNull: true }} }}
    first: $first
    after: $after
    orderBy: NFT_ID_ASC
  ) {{
    totalCount
    pageInfo {{ hasNextPage endCursor }}
    nodes {{ {NFT_FIELDS} }}
  }}
}}
"""


class IndexerProvider:
    """GraphQL client for the ledger indexer.

    Uses one httpx.AsyncClient for all requests; call `close()` on shutdown.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the indexer provider.

        Args:
            base_url: Indexer GraphQL endpoint.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client (tests inject a mock transport).
        """
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.post("", json={"query": query, "variables": variables})
        response.raise_for_status()
        payload = response.json()
        if payload.get("errors"):
            logger.error("Indexer query failed: %s", payload["errors"])
            raise IndexerError(str(payload["errors"]))
        return payload["data"]

    async def get_nfts(self, query: NFTsQuery, first: int = 100) -> NFTPage:
        """List NFTs matching the query filters."""
        data = await self._execute(
            NFTS_QUERY,
            {"filter": filter_to_graphql(query.filter), "first": first},
        )
        return connection_to_page(data["nftEntities"])

    async def get_nft(self, nft_id: str) -> NFT:
        """Fetch one NFT by id.

        Raises:
            ValueError: If the indexer has no such (unburnt) NFT.
        """
        data = await self._execute(NFT_QUERY, {"id": nft_id})
        nodes = data["nftEntities"]["nodes"]
        if not nodes:
            raise ValueError(f"NFT '{nft_id}' not found")
        return node_to_nft(nodes[0])

    async def get_series(self, serie_ids: list[str], page_size: int = 100) -> NFTPage:
        """Fetch every NFT belonging to the given series (unique serie "0" excluded).

        Follows `endCursor` until the indexer reports no further page, so the
        snapshot is complete even when the indexer caps page size.
        """
        ids = sorted({s for s in serie_ids if s and s != "0"})
        if not ids:
            return NFTPage()
        nfts: list[NFT] = []
        after: str | None = None
        while True:
            data = await self._execute(
                SERIES_QUERY,
                {"serieIds": ids, "first": page_size, "after": after},
            )
            connection = data["nftEntities"]
            nfts.extend(connection_to_page(connection).data)
            page_info = connection.get("pageInfo") or {}
            after = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not after:
                break
        return NFTPage(data=nfts, total_count=len(nfts))

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
