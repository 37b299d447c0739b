"""Tests for image reference resolution."""

import base64

import pytest
import requests

from mission_report.exceptions import AssetDecodeError, MissingOptionalAssetError
from mission_report.layout import images
from mission_report.layout.images import ImageResolver

from conftest import make_noise_png


class FakeResponse:
    def __init__(self, content, status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class TestImageResolver:
    def test_bytes(self, png_bytes):
        resolved = ImageResolver().resolve(png_bytes)
        assert (resolved.width, resolved.height) == (40, 20)
        assert resolved.source == png_bytes

    def test_data_uri(self, png_bytes):
        uri = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        resolved = ImageResolver().resolve(uri)
        assert (resolved.width, resolved.height) == (40, 20)

    def test_relative_path(self, chart_file, tmp_path):
        resolved = ImageResolver(base_dir=str(tmp_path)).resolve("chart.png")
        assert (resolved.width, resolved.height) == (400, 200)

    def test_path_object(self, chart_file):
        assert ImageResolver().resolve(chart_file).width == 400

    @pytest.mark.parametrize("ref", [None, "", b""])
    def test_missing(self, ref):
        with pytest.raises(MissingOptionalAssetError):
            ImageResolver().resolve(ref)

    def test_missing_file(self, tmp_path):
        with pytest.raises(AssetDecodeError):
            ImageResolver(base_dir=str(tmp_path)).resolve("absent.png")

    def test_truncated_image(self):
        noisy = make_noise_png()
        with pytest.raises(AssetDecodeError):
            ImageResolver().resolve(noisy[:len(noisy) // 2])

    def test_garbage_bytes(self):
        with pytest.raises(AssetDecodeError):
            ImageResolver().resolve(b"\x00\x01 not an image")

    def test_bad_data_uri(self):
        with pytest.raises(AssetDecodeError):
            ImageResolver().resolve("data:image/png;base64,@@@")

    def test_results_are_cached_per_resolver(self, chart_file):
        resolver = ImageResolver()
        assert resolver.resolve(str(chart_file)) is resolver.resolve(str(chart_file))
        other = ImageResolver()
        assert other.resolve(str(chart_file)) is not resolver.resolve(str(chart_file))

    def test_http(self, monkeypatch, png_bytes):
        calls = []

        def fake_get(url, timeout):
            calls.append(url)
            return FakeResponse(png_bytes)

        monkeypatch.setattr(images.requests, "get", fake_get)
        resolver = ImageResolver()
        resolved = resolver.resolve("https://example.com/chart.png")
        resolver.resolve("https://example.com/chart.png")
        assert resolved.width == 40
        assert calls == ["https://example.com/chart.png"]

    def test_http_error(self, monkeypatch):
        monkeypatch.setattr(images.requests, "get", lambda url, timeout: FakeResponse(b"", 404))
        with pytest.raises(AssetDecodeError):
            ImageResolver().resolve("https://example.com/missing.png")

    def test_connection_error(self, monkeypatch):
        def fail(url, timeout):
            raise requests.ConnectionError("unreachable")

        monkeypatch.setattr(images.requests, "get", fail)
        with pytest.raises(AssetDecodeError):
            ImageResolver().resolve("http://example.com/chart.png")
