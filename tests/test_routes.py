"""
Test: HTTP surface (FastAPI routes with container overrides)
"""
import json

import httpx
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from conftest import ipfs_document
from nft_enrichment.main import create_app
from nft_enrichment.providers import IndexerProvider

NODES = [
    {"nftId": "1", "owner": "5Owner", "creator": "5Creator", "listed": 1, "serieId": "42",
     "price": "5", "priceTiime": "0", "marketplaceId": "1",
     "nftIpfs": "https://cloudflare-ipfs.com/ipfs/QmDoc"},
    {"nftId": "2", "owner": "5Other", "creator": "5Creator", "listed": 1, "serieId": "42",
     "price": "3", "priceTiime": "0", "marketplaceId": "2", "nftIpfs": None},
    {"nftId": "3", "owner": "5Owner", "creator": "5Creator", "listed": 0, "serieId": "0",
     "price": "1", "priceTiime": "0", "marketplaceId": None, "nftIpfs": None},
]


def indexer_handler(request: httpx.Request) -> httpx.Response:
    body = request.read().decode()
    if "$serieIds" in body:
        nodes = [n for n in NODES if n["serieId"] == "42"]
        return httpx.Response(200, json={"data": {"nftEntities": {"totalCount": len(nodes), "nodes": nodes}}})
    if "$id" in body:
        nft_id = json.loads(body)["variables"]["id"]
        nodes = [n for n in NODES if n["nftId"] == nft_id]
        return httpx.Response(200, json={"data": {"nftEntities": {"nodes": nodes}}})
    return httpx.Response(
        200,
        json={"data": {"nftEntities": {"totalCount": 3, "pageInfo": {"hasNextPage": False}, "nodes": NODES}}},
    )


@pytest.fixture
def client(build_service):
    app = create_app()
    container = app.state.container
    indexer = IndexerProvider(
        "https://indexer.test",
        client=httpx.AsyncClient(base_url="https://indexer.test", transport=httpx.MockTransport(indexer_handler)),
    )
    doc = ipfs_document("https://cloudflare-ipfs.com/ipfs/QmMedia", "https://cloudflare-ipfs.com/ipfs/QmCrypted")
    service = build_service({"https://ipfs.ternoa.dev/ipfs/QmDoc": doc})
    container.indexer.override(providers.Object(indexer))
    container.enrichment_service.override(providers.Object(service))
    yield TestClient(app)
    container.reset_override()


def test_ping(client):
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.json() == "Working as it should"


def test_list_nfts(client):
    response = client.get("/api/NFTs", params={"owner": "5Owner"})
    assert response.status_code == 200
    body = response.json()
    assert body["totalCount"] == 3
    assert body["hasNextPage"] is False
    first, second, third = body["data"]
    assert first["id"] == "1"
    assert first["uri"] == "https://ipfs.ternoa.dev/ipfs/QmDoc"
    assert first["media"]["url"] == "https://ipfs.ternoa.dev/ipfs/QmMedia"
    assert [s["id"] for s in first["serieData"]] == ["2", "1"]
    assert first["totalOwnedByRequestingUser"] == 1
    assert first["smallestPrice"] == "3"
    assert first["creatorData"]["name"] == "Alice"
    assert first["categories"] == [{"code": "art", "name": "Art", "description": None}]
    assert second["ownerData"] is None
    assert third["totalNft"] == 1


def test_list_nfts_marketplace_and_no_series_data(client):
    response = client.get("/api/NFTs", params={"marketplaceId": 1, "noSeriesData": "true"})
    first = response.json()["data"][0]
    assert first["serieData"] == []
    assert first["totalListedInMarketplace"] == 1
    assert first["smallestPrice"] == "5"


def test_get_nft(client):
    response = client.get("/api/NFTs/2")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "2"
    assert body["totalNft"] == 2
    assert body["totalListedNft"] == 2


def test_get_nft_not_found(client):
    response = client.get("/api/NFTs/404")
    assert response.status_code == 404
    assert response.json()["detail"] == "NFT '404' not found"


def test_indexer_failure_maps_to_502(build_service):
    app = create_app()
    container = app.state.container
    failing = IndexerProvider(
        "https://indexer.test",
        client=httpx.AsyncClient(
            base_url="https://indexer.test",
            transport=httpx.MockTransport(lambda r: httpx.Response(500)),
        ),
    )
    container.indexer.override(providers.Object(failing))
    container.enrichment_service.override(providers.Object(build_service()))
    try:
        response = TestClient(app).get("/api/NFTs")
    finally:
        container.reset_override()
    assert response.status_code == 502
    assert response.json()["detail"] == "Indexer error"
