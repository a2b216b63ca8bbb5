"""Utility functions for resolving stored file paths to fetchable URLs."""

from typing import Optional
from urllib.parse import quote

from recruiter_pipeline.constants import SERVE_FILE_PATH


def is_s3_url(url: str) -> bool:
    """Check if a URL points at an S3 bucket (object or website endpoint)."""
    return url.startswith("http") and "s3" in url and "amazonaws.com" in url


def ensure_https(url: str) -> str:
    """Rewrite legacy HTTP S3 website URLs to HTTPS object URLs.

    Examples:
        >>> ensure_https("http://bucket.s3-website.us-east-1.amazonaws.com/a.pdf")
        'https://bucket.s3.us-east-1.amazonaws.com/a.pdf'
    """
    if url.startswith("http://") and ".s3-website." in url and "amazonaws.com" in url:
        return url.replace("http://", "https://", 1).replace(".s3-website.", ".s3.", 1)
    return url


def resolve_storage_url(path_or_url: Optional[str], base_url: str) -> str:
    """Map a stored resume or recording path to a URL the browser can fetch.

    S3 URLs go through the backend's serve-file proxy (private buckets need
    presigned access), other absolute URLs pass through, and relative paths
    are joined to the API base URL.

    Args:
        path_or_url: Stored path or URL.
        base_url: Base URL of the hiring backend.

    Returns:
        Fetchable URL, or "" when nothing is stored.
    """
    if not path_or_url or not isinstance(path_or_url, str):
        return ""

    value = path_or_url.strip()
    base_url = base_url.rstrip("/")

    if value.startswith("http") and is_s3_url(value):
        return f"{base_url}{SERVE_FILE_PATH}?url={quote(ensure_https(value), safe='')}"
    if value.startswith("http"):
        return ensure_https(value)

    separator = "" if value.startswith("/") else "/"
    return f"{base_url}{separator}{value}"
