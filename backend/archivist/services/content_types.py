"""
Archivist Backend - Content Type Negotiation
==============================================

What:  Pure helpers turning a stored filename into response headers.
How:   A fixed extension → MIME lookup table, with PDF checked separately.
Who:   Used by the asset routes for both the raw and the JSON variants.
"""

from urllib.parse import quote

# ── Extension Map ─────────────────────────────────────────────────────────
CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
}

PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Matches the cache TTL: a client may reuse a response as long as we would
CACHE_CONTROL = "public, max-age=3600"

# Characters JavaScript's encodeURIComponent leaves untouched (besides alnum)
_UNRESERVED = "-_.!~*'()"


def content_type_for(filename: str) -> str:
    """
    Infer the MIME type from a filename extension.

    Examples:
        "scan.PDF"      → application/pdf
        "photo.JPG"     → image/jpeg
        "archive.tar"   → application/octet-stream
        "README"        → application/octet-stream
    """
    lower = filename.lower()
    if lower.endswith(".pdf"):
        return PDF_CONTENT_TYPE
    if "." not in lower:
        return DEFAULT_CONTENT_TYPE
    extension = lower.rsplit(".", 1)[-1]
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def content_disposition(filename: str) -> str:
    """`inline` disposition with a percent-encoded filename."""
    return f'inline; filename="{quote(filename, safe=_UNRESERVED)}"'
