"""
HTML sanitization, fence stripping and word counting
Shared by the generator adapter and the template engine
"""
import re

_TAG_RE = re.compile(r'<[^>]*>')
_LEADING_FENCE_RE = re.compile(r'^```[A-Za-z0-9_+-]*[ \t]*\r?\n?')
_TRAILING_FENCE_RE = re.compile(r'\r?\n?[ \t]*```$')
_OPEN_TAG_RE = re.compile(r'<[A-Za-z][^>]*>')
_EVENT_ATTR_RE = re.compile(r'\s+on\w+\s*=\s*(?:"[^"]*"|\'[^\']*\'|[^\s>]+)', re.IGNORECASE)
_JS_URL_RE = re.compile(r'(\b(?:href|src)\s*=\s*["\']?)\s*javascript:', re.IGNORECASE)


def count_words(content: str) -> int:
    """
    Count words in HTML content
    Args:
        content: HTML content
    Returns:
        Number of whitespace-delimited tokens once every tag is replaced by a space
    """
    if not content:
        return 0

    text = _TAG_RE.sub(' ', content)
    return len(text.split())


def strip_code_fence(content: str) -> str:
    """
    Remove a surrounding markdown code fence from a model response
    Args:
        content: Raw model response
    Returns:
        Response body with a leading ```json / ``` fence and its closing fence removed
    """
    body = (content or '').strip()

    if not body.startswith('```'):
        return body

    body = _LEADING_FENCE_RE.sub('', body, count=1)
    body = _TRAILING_FENCE_RE.sub('', body, count=1)

    return body.strip()


def _clean_tag(match: re.Match) -> str:
    tag = _EVENT_ATTR_RE.sub('', match.group(0))
    return _JS_URL_RE.sub(r'\1', tag)


def sanitize_html(content: str) -> str:
    """
    Remove scripts, styles, and dangerous tags
    Args:
        content: HTML content to sanitize
    Returns:
        Sanitized HTML safe for the store front
    """
    if not content:
        return content

    # Remove dangerous tags
    content = re.sub(r'<script[^>]*>.*?</script>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<style[^>]*>.*?</style>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<iframe[^>]*>.*?</iframe>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<object[^>]*>.*?</object>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<embed[^>]*>', '', content, flags=re.IGNORECASE)
    content = re.sub(r'<link[^>]*>', '', content, flags=re.IGNORECASE)
    content = re.sub(r'<meta[^>]*>', '', content, flags=re.IGNORECASE)

    # Event handlers and javascript: URLs, only inside tags
    content = _OPEN_TAG_RE.sub(_clean_tag, content)

    return content.strip()


def strip_html_tags(content: str) -> str:
    """Plain text preview of HTML content, used for CSV export"""
    if not content:
        return content

    text = _TAG_RE.sub(' ', content)
    return ' '.join(text.split())
