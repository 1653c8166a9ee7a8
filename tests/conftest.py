"""Shared fixtures for the enrichment tests."""
from typing import Any

import httpx
import pytest

from nft_enrichment.schemas import NFT, CategoryRecord, NFTPage, UserRecord
from nft_enrichment.services import (CategoryResolver, IdentityResolver,
                                     IpfsUriNormalizer, NftEnrichmentService,
                                     RemoteMetadataFetcher)

GATEWAY = "https://ipfs.ternoa.dev/ipfs"


def make_nft(nft_id: str, **fields: Any) -> NFT:
    """Build an NFT with sensible defaults for tests."""
    defaults = {
        "serie_id": "0",
        "owner": "5Owner",
        "creator": "5Creator",
        "listed": 0,
        "price": "0",
        "price_tiime": "0",
    }
    defaults.update(fields)
    return NFT(id=nft_id, **defaults)


class FakeUserDirectory:
    """In-memory user directory; records every lookup."""

    def __init__(self, users: dict[str, UserRecord] | None = None, error: Exception | None = None) -> None:
        self.users = users or {}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def find_user(self, id_filter: dict[str, Any]) -> UserRecord | None:
        self.calls.append(id_filter)
        if self.error is not None:
            raise self.error
        return self.users.get(id_filter["id"])


class FakeCategoryDirectory:
    """In-memory category directory."""

    def __init__(self, categories: dict[str, list[CategoryRecord]] | None = None, error: Exception | None = None) -> None:
        self.categories = categories or {}
        self.error = error

    async def find_categories_from_id(self, nft_id: str) -> list[CategoryRecord] | None:
        if self.error is not None:
            raise self.error
        return self.categories.get(nft_id)


def ipfs_document(media_url: str, crypted_url: str, **extra: Any) -> dict[str, Any]:
    return {
        "title": "Sunset",
        "description": "A sunset",
        "media": {"url": media_url},
        "cryptedMedia": {"url": crypted_url},
        **extra,
    }


def json_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """Mock transport answering each known URL with JSON, 404 otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        payload = routes.get(str(request.url))
        if payload is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


@pytest.fixture
def normalizer() -> IpfsUriNormalizer:
    return IpfsUriNormalizer(gateway_base=GATEWAY)


@pytest.fixture
def alice() -> UserRecord:
    return UserRecord(id="5Creator", name="Alice", verified=True)


@pytest.fixture
def bob() -> UserRecord:
    return UserRecord(id="5Owner", name="Bob")


@pytest.fixture
def user_directory(alice, bob) -> FakeUserDirectory:
    return FakeUserDirectory({alice.id: alice, bob.id: bob})


@pytest.fixture
def category_directory() -> FakeCategoryDirectory:
    return FakeCategoryDirectory(
        {"1": [CategoryRecord(code="art", name="Art")]}
    )


@pytest.fixture
def build_service(normalizer, user_directory, category_directory):
    """Factory: enrichment service whose IPFS client answers from `routes`."""

    def _build(routes: dict[str, Any] | None = None, transport: httpx.MockTransport | None = None) -> NftEnrichmentService:
        client = httpx.AsyncClient(transport=transport or json_transport(routes or {}))
        return NftEnrichmentService(
            normalizer=normalizer,
            identity=IdentityResolver(user_directory),
            fetcher=RemoteMetadataFetcher(client, normalizer),
            categories=CategoryResolver(category_directory),
        )

    return _build


@pytest.fixture
def empty_series() -> NFTPage:
    return NFTPage()
