"""
Test: IPFS URI normalization
"""
import pytest

from conftest import make_nft
from nft_enrichment.providers.core import MalformedUriError
from nft_enrichment.services import IpfsUriNormalizer, extract_identifier


class TestExtractIdentifier:

    def test_returns_last_segment(self):
        assert extract_identifier("https://cloudflare-ipfs.com/ipfs/QmABC123") == "QmABC123"

    def test_plain_http(self):
        assert extract_identifier("http://localhost:8080/ipfs/QmXYZ") == "QmXYZ"

    @pytest.mark.parametrize(
        "uri",
        ["https://cloudflare-ipfs.com/ipfs/", "QmABC123", "ipfs://QmABC123", ""],
    )
    def test_malformed_uri_raises(self, uri):
        with pytest.raises(MalformedUriError):
            extract_identifier(uri)


class TestCanonicalize:

    def test_canonical_uri_is_unchanged(self, normalizer):
        uri = "https://ipfs.ternoa.dev/ipfs/QmABC123"
        assert normalizer.is_canonical(uri)
        assert normalizer.canonicalize(uri) == uri

    def test_other_gateway_is_rewritten(self, normalizer):
        assert (
            normalizer.canonicalize("https://cloudflare-ipfs.com/ipfs/QmABC123")
            == "https://ipfs.ternoa.dev/ipfs/QmABC123"
        )

    def test_default_gateway(self):
        assert IpfsUriNormalizer().canonicalize(
            "https://ternoa.mypinata.cloud/ipfs/QmABC123"
        ) == "https://ipfs.ternoa.dev/ipfs/QmABC123"

    def test_override_gateway(self):
        normalizer = IpfsUriNormalizer(gateway_base="https://gw.example.org/ipfs")
        assert normalizer.canonicalize(
            "https://ipfs.ternoa.dev/ipfs/QmABC123"
        ) == "https://gw.example.org/ipfs/QmABC123"


class TestNormalizeIfNeeded:

    def test_rewrites_copy_and_leaves_input_alone(self, normalizer):
        nft = make_nft("1", uri="https://cloudflare-ipfs.com/ipfs/QmABC123")
        normalized = normalizer.normalize_if_needed(nft)
        assert normalized.uri == "https://ipfs.ternoa.dev/ipfs/QmABC123"
        assert nft.uri == "https://cloudflare-ipfs.com/ipfs/QmABC123"

    def test_canonical_nft_returned_as_is(self, normalizer):
        nft = make_nft("1", uri="https://ipfs.ternoa.dev/ipfs/QmABC123")
        assert normalizer.normalize_if_needed(nft) is nft

    def test_missing_uri(self, normalizer):
        nft = make_nft("1", uri=None)
        assert normalizer.normalize_if_needed(nft) is nft

    def test_malformed_uri_returns_original(self, normalizer, caplog):
        nft = make_nft("1", uri="https://cloudflare-ipfs.com/ipfs/")
        assert normalizer.normalize_if_needed(nft) is nft
        assert "Can't parse raw nft" in caplog.text
