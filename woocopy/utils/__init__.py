"""
Utility modules for description generation
"""
from .sanitizers import count_words, strip_code_fence, sanitize_html, strip_html_tags

__all__ = [
    "count_words",
    "strip_code_fence",
    "sanitize_html",
    "strip_html_tags",
]
