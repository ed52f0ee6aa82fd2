"""
Archivist Backend - Content Type Helper Tests
===============================================

What we test:
    ✅ Extension lookup is case-insensitive
    ✅ PDF detected by suffix, everything unknown is octet-stream
    ✅ Content-Disposition percent-encoding matches encodeURIComponent
"""

import pytest

from archivist.services.content_types import (
    DEFAULT_CONTENT_TYPE,
    PDF_CONTENT_TYPE,
    content_disposition,
    content_type_for,
)


class TestContentTypeFor:

    @pytest.mark.parametrize("filename, expected", [
        ("photo.jpg", "image/jpeg"),
        ("photo.JPEG", "image/jpeg"),
        ("scan.png", "image/png"),
        ("anim.gif", "image/gif"),
        ("logo.svg", "image/svg+xml"),
        ("picture.WebP", "image/webp"),
        ("Rechnung 2024.PDF", PDF_CONTENT_TYPE),
        ("archive.tar.pdf", PDF_CONTENT_TYPE),
    ])
    def test_known_extensions(self, filename, expected):
        assert content_type_for(filename) == expected

    @pytest.mark.parametrize("filename", [
        "notes.txt",
        "archive.tar.gz",
        "README",
        "pdf",
        "png",
        "trailing.dot.",
    ])
    def test_unknown_extensions_fall_back(self, filename):
        assert content_type_for(filename) == DEFAULT_CONTENT_TYPE


class TestContentDisposition:

    def test_plain_filename_unchanged(self):
        assert content_disposition("scan_01.png") == 'inline; filename="scan_01.png"'

    def test_spaces_and_umlauts_are_percent_encoded(self):
        assert (
            content_disposition("Rechnung März 2024.pdf")
            == 'inline; filename="Rechnung%20M%C3%A4rz%202024.pdf"'
        )

    def test_unreserved_marks_are_kept(self):
        assert content_disposition("a-b_c.d!e~f*g'h(i).png") == (
            "inline; filename=\"a-b_c.d!e~f*g'h(i).png\""
        )

    def test_quotes_and_separators_are_encoded(self):
        assert content_disposition('a"b/c;d.png') == 'inline; filename="a%22b%2Fc%3Bd.png"'
