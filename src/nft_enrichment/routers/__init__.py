"""API routers.

Includes routes for:
- /api/NFTs - enriched NFT listing
- /api/NFTs/{nft_id} - enriched NFT detail
"""
from nft_enrichment.routers.nfts import router as nfts_router

__all__ = ["nfts_router"]
