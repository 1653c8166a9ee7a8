"""DI container. Wire via init_container(); endpoints use Depends(Provide[Container.*])."""
from typing import Annotated

import httpx
from dependency_injector import containers, providers
from dependency_injector.wiring import Provide
from fastapi import Depends

from nft_enrichment.config import get_settings
from nft_enrichment.db.directories import (SqlCategoryDirectory,
                                           SqlUserDirectory)
from nft_enrichment.db.sessions import build_engine
from nft_enrichment.providers import IndexerProvider, ProviderErrorMapper
from nft_enrichment.services import (CategoryResolver, IdentityResolver,
                                     IpfsUriNormalizer, NftEnrichmentService,
                                     RemoteMetadataFetcher)


class Container(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=["nft_enrichment.routers.nfts"]
    )

    settings = providers.Singleton(get_settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.sql_echo,
    )
    user_directory = providers.Singleton(SqlUserDirectory, engine)
    category_directory = providers.Singleton(SqlCategoryDirectory, engine)

    # Shared client for IPFS documents; per-request timeout is set by the fetcher
    ipfs_client = providers.Singleton(httpx.AsyncClient, follow_redirects=True)

    normalizer = providers.Singleton(
        IpfsUriNormalizer, gateway_base=settings.provided.gateway_base
    )
    identity_resolver = providers.Singleton(IdentityResolver, user_directory)
    category_resolver = providers.Singleton(CategoryResolver, category_directory)
    metadata_fetcher = providers.Singleton(
        RemoteMetadataFetcher,
        client=ipfs_client,
        normalizer=normalizer,
        timeout_ms=settings.provided.ipfs_request_timeout,
    )
    enrichment_service = providers.Singleton(
        NftEnrichmentService,
        normalizer=normalizer,
        identity=identity_resolver,
        fetcher=metadata_fetcher,
        categories=category_resolver,
    )

    indexer = providers.Singleton(
        IndexerProvider,
        base_url=settings.provided.indexer_url,
        timeout=settings.provided.indexer_timeout,
    )
    error_mapper = providers.Singleton(
        ProviderErrorMapper, resource_name="NFT", api_name="Indexer"
    )


# Type aliases for route injection (avoid repeating Annotated[...] in every route)
EnrichmentServiceDep = Annotated[
    NftEnrichmentService, Depends(Provide[Container.enrichment_service])
]
IndexerDep = Annotated[IndexerProvider, Depends(Provide[Container.indexer])]
ErrorMapperDep = Annotated[ProviderErrorMapper, Depends(Provide[Container.error_mapper])]


def init_container() -> Container:
    """Create container and wire to router modules."""
    container = Container()
    container.wire()
    return container
