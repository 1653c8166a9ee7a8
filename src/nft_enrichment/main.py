"""Main module for the NFT enrichment service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from nft_enrichment import __version__
from nft_enrichment.config import get_settings
from nft_enrichment.container import Container, init_container
from nft_enrichment.db.sessions import init_db
from nft_enrichment.routers import nfts_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Optionally create tables at startup; close HTTP clients on shutdown."""
    container: Container = fastapi_app.state.container
    if container.settings().db_create_tables:
        init_db(container.engine())

    yield

    # Close provider resources (httpx clients)
    for closeable in (container.metadata_fetcher(), container.indexer()):
        try:
            await closeable.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing %s: %s", type(closeable).__name__, exc)


def create_app() -> FastAPI:
    """Build the FastAPI app with a freshly wired container."""
    fastapi_app = FastAPI(
        title="NFT Enrichment API",
        description="NFT records enriched with serie, owner, IPFS and category data",
        version=__version__,
        lifespan=lifespan,
    )
    fastapi_app.state.container = init_container()
    fastapi_app.include_router(nfts_router)

    @fastapi_app.get("/ping")
    def ping() -> str:
        """Liveness check."""
        return "Working as it should"

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for the `start` script."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("nft_enrichment.main:app", host=settings.host, port=settings.port)
