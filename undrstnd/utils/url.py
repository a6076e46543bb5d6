"""URL helpers."""

from typing import Optional


def without_trailing_slash(url: Optional[str]) -> Optional[str]:
    """Strip one trailing slash; ``None`` and empty strings map to ``None``."""
    if not url:
        return None
    return url[:-1] if url.endswith("/") else url
