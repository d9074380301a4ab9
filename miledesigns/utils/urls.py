from __future__ import annotations

import re

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_http_url = TypeAdapter(AnyHttpUrl)


class UrlNormalizationError(ValueError):
    pass


def normalize_url(raw: str | None) -> str:
    """
    Turn operator input into an absolute http(s) URL.
      "example.com/video"  -> "https://example.com/video"
      "https://X.com"      -> "https://x.com/"
      "not a url"          -> UrlNormalizationError
    """
    s = (raw or "").strip()
    if not s:
        raise UrlNormalizationError("URL is empty")
    if not _SCHEME_RE.match(s):
        s = f"https://{s}"
    try:
        url = _http_url.validate_python(s)
    except ValidationError as e:
        raise UrlNormalizationError(f"Invalid URL: {raw!r}") from e
    if not url.host:
        raise UrlNormalizationError(f"Invalid URL (no host): {raw!r}")
    return str(url)
