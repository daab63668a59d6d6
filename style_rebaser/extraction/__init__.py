"""
Stylesheet text extraction: ``url()`` values and module specifiers.
"""

from style_rebaser.extraction.urls import UrlToken, find_urls
from style_rebaser.extraction.imports import ImportReference, extract_imports, strip_comments

__all__ = ["UrlToken", "find_urls", "ImportReference", "extract_imports", "strip_comments"]
