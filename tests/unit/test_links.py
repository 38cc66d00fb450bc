"""Tests for auxiliary link extraction."""

from heroscan.extraction.links import LinkExtractor, extract_links, is_button_anchor
from heroscan.extraction.markup import MarkupNode, parse_html
from tests.fixtures.pages import FULL_LANDING_PAGE


class TestLinkExtractor:
    """Tests for LinkExtractor."""

    def test_full_page(self) -> None:
        """Button-styled anchors belong to the button extractor."""
        tree = parse_html(FULL_LANDING_PAGE)
        links = extract_links(tree, tree.select("header")[0])

        assert [(link.text, link.href) for link in links] == [
            ("Read the docs", "/docs"),
        ]

    def test_missing_href_defaults(self) -> None:
        tree = parse_html('<div id="box"><a>Jump</a></div>')
        assert extract_links(tree, tree.select("#box")[0])[0].href == "#"

    def test_empty_text_skipped(self) -> None:
        tree = parse_html('<div id="box"><a href="/x"> </a><a href="/y">Why</a></div>')
        assert [link.text for link in extract_links(tree, tree.select("#box")[0])] == ["Why"]

    def test_cap(self) -> None:
        anchors = "".join(f'<a href="/{i}">Link {i}</a>' for i in range(12))
        tree = parse_html(f'<div id="box">{anchors}</div>')
        links = LinkExtractor(max_links=10).extract(tree, tree.select("#box")[0])

        assert len(links) == 10
        assert links[-1].text == "Link 9"


def test_is_button_anchor() -> None:
    assert is_button_anchor(MarkupNode(1, "a", attrs={"class": "nav-button"}))
    assert is_button_anchor(MarkupNode(1, "a", attrs={"class": "BTN"}))
    assert is_button_anchor(MarkupNode(1, "a", attrs={"role": "button"}))
    assert not is_button_anchor(MarkupNode(1, "a", attrs={"class": "text-link"}))


def test_cta_anchor_is_not_a_link() -> None:
    """Anchors picked up by the button selectors never show up as links too."""
    for classes in ("cta-main", "cta-link", "call-to-action", "primary-link", "hero-link"):
        assert is_button_anchor(MarkupNode(1, "a", attrs={"class": classes}))

    tree = parse_html(
        '<div id="box"><a class="cta-main" href="/start">Get started</a>'
        '<a href="/faq">Questions</a></div>'
    )
    assert [link.text for link in extract_links(tree, tree.select("#box")[0])] == ["Questions"]
