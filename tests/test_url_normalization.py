import pytest

from miledesigns.utils.urls import UrlNormalizationError, normalize_url


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("example.com/video", "https://example.com/video"),
        ("  example.com/video  ", "https://example.com/video"),
        ("https://x.com/y", "https://x.com/y"),
        ("HTTP://Example.com/Path", "http://example.com/Path"),
        ("https://youtube.com", "https://youtube.com/"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize("raw", ["not a url", "", "   ", None, "https://"])
def test_normalize_url_failures(raw):
    with pytest.raises(UrlNormalizationError):
        normalize_url(raw)
