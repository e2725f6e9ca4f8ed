from woocopy.utils import count_words, sanitize_html, strip_code_fence, strip_html_tags


def test_count_words_ignores_markup():
    assert count_words("<p>x</p>") == 1
    assert count_words("<h2>Product Overview</h2><p>Two  words</p>") == 4
    assert count_words("") == 0
    assert count_words("<br><hr>") == 0


def test_count_words_splits_adjacent_tags():
    # Tags become whitespace, so words in adjacent elements stay separate
    assert count_words("<li>one</li><li>two</li>") == 2


def test_strip_code_fence_typed_and_untyped():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('  ```json\n{"a": 1}```  ') == '{"a": 1}'


def test_strip_code_fence_leaves_plain_text_alone():
    assert strip_code_fence('{"a": "```"}') == '{"a": "```"}'
    assert strip_code_fence("") == ""


def test_sanitize_html_removes_scripts_and_handlers():
    html = '<p onclick="steal()">Hi</p><script>alert(1)</script><a href="javascript:x()">link</a>'
    cleaned = sanitize_html(html)
    assert "<script" not in cleaned
    assert "onclick" not in cleaned
    assert "javascript:" not in cleaned
    assert "<p>Hi</p>" in cleaned


def test_strip_html_tags_collapses_whitespace():
    assert strip_html_tags("<ul>\n  <li>Fast</li>\n  <li>Cheap</li>\n</ul>") == "Fast Cheap"


def test_sanitize_html_leaves_prose_alone():
    html = "<p>Learn JavaScript: The Good Parts, sold online = fast</p><p>Turn on = off switch</p>"
    assert sanitize_html(html) == html


def test_sanitize_html_strips_unquoted_handlers_and_urls():
    cleaned = sanitize_html('<img src=x.png onerror=alert(1) alt="x"><a href= "JavaScript:go()">Go</a>')
    assert cleaned == '<img src=x.png alt="x"><a href= "go()">Go</a>'
