"""Normalizer Email — corpo HTML renderizado pelo host → texto puro."""

from api.normalizers.email.html import extract_body, normalize_html

__all__ = [
    "extract_body",
    "normalize_html",
]
