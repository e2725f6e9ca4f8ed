import re

from conftest import make_item, make_profile

from woocopy.services import template_engine


def _stripped_tokens(html: str) -> int:
    return len([t for t in re.sub(r"<[^>]*>", " ", html).split() if t])


def test_render_is_deterministic(items, profile):
    for item in items:
        first = template_engine.render(item, profile)
        second = template_engine.render(item, profile)
        assert first.long_description == second.long_description
        assert first.short_description == second.short_description


def test_word_count_matches_stripped_tokens(items, profile):
    for item in items:
        result = template_engine.render(item, profile)
        assert result.word_count == _stripped_tokens(result.long_description)
        assert result.word_count > 500


def test_sections_in_fixed_order(profile):
    html = template_engine.render(make_item(1), profile).long_description
    headings = [
        "<h2>Product Overview</h2>",
        "<h2>Key Features &amp; Benefits</h2>",
        "<h2>Technical Specifications</h2>",
        "<h2>Use Cases &amp; Applications</h2>",
        "<h2>Why Buy From Acme Supplies</h2>",
        "<h2>Comparison: Product 1 vs. Standard Alternatives</h2>",
        "<h2>Storage, Handling &amp; Safety</h2>",
        "<h2>Frequently Asked Questions</h2>",
        "<h2>About Acme Supplies</h2>",
    ]
    positions = [html.index(h) for h in headings]
    assert positions == sorted(positions)
    assert html.count("<strong>Q:") == 6


def test_attribute_rows_follow_fixed_rows(profile):
    item = make_item(3, Colour=["Red", "Blue"], Size="5L")
    html = template_engine.render(item, profile).long_description
    assert ">Colour</td>" in html
    assert ">Red, Blue</td>" in html
    assert ">5L</td>" in html
    assert html.index(">Origin</td>") < html.index(">Colour</td>")


def test_usp_bullets_use_profile_or_default():
    with_usps = template_engine.render(make_item(1), make_profile(usps=["A", "B", "A"])).long_description
    assert with_usps.count("<li><strong>A</strong>") == 2
    assert "Quality Assurance" not in with_usps

    default = template_engine.usp_bullets([])
    assert default.count("<li>") == 4
    assert "Quality Assurance" in default


def test_missing_fields_get_defaults():
    item = make_item(9, name=" ", category="")
    profile = make_profile(companyName="", targetAudience="", description="")
    result = template_engine.render(item, profile)

    assert "This product" in result.long_description
    assert "undefined" not in result.long_description
    assert "None" not in result.long_description
    assert "premium product" in result.long_description
    assert "Premium product from trusted wholesaler" in result.short_description


def test_short_description_has_six_bullets(profile):
    short = template_engine.render(make_item(1, category="Sealants"), profile).short_description
    assert short.startswith("<ul>") and short.endswith("</ul>")
    assert short.count("<li>") == 6
    assert "Premium sealants from trusted wholesaler" in short
