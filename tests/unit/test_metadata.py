"""Tests for head metadata extraction."""

from heroscan.extraction.markup import parse_html
from heroscan.extraction.metadata import HeadMetadata, extract_head_metadata
from tests.fixtures.pages import FULL_LANDING_PAGE


class TestExtractHeadMetadata:
    """Tests for extract_head_metadata."""

    def test_full_page(self) -> None:
        head = extract_head_metadata(parse_html(FULL_LANDING_PAGE))

        assert head.title == "Acme Analytics | Dashboards for Teams"
        assert head.description == "Acme builds Analytics dashboards for growing teams."
        assert head.og_title == "Acme Analytics"
        assert head.og_description == "Dashboards your whole team understands."
        assert head.og_image == "https://acme.test/og.png"
        assert head.twitter_title == "Acme on Twitter"
        assert head.twitter_description == ""
        assert head.twitter_image == "https://acme.test/tw.png"
        assert head.canonical == "https://acme.test/analytics"

    def test_name_and_property_are_interchangeable(self) -> None:
        html = (
            '<head><meta name="og:title" content="By name">'
            '<meta property="twitter:title" content="By property"></head>'
        )
        head = extract_head_metadata(parse_html(html))

        assert head.og_title == "By name"
        assert head.twitter_title == "By property"

    def test_empty_document(self) -> None:
        assert extract_head_metadata(parse_html("<p>No head</p>")) == HeadMetadata()


class TestHeadMetadataDict:
    """Tests for the dict conversions."""

    def test_to_dict_keys(self) -> None:
        data = HeadMetadata(title="T", description="D", og_title="O").to_dict()

        assert data["title"] == "T"
        assert data["metaDescription"] == "D"
        assert data["ogTitle"] == "O"
        assert data["canonical"] == ""

    def test_from_dict_accepts_both_styles(self) -> None:
        camel = HeadMetadata.from_dict({"ogTitle": "A", "metaDescription": "B"})
        snake = HeadMetadata.from_dict({"og_title": "A", "description": "B"})

        assert camel == snake == HeadMetadata(og_title="A", description="B")

    def test_from_dict_ignores_unknown_and_none(self) -> None:
        head = HeadMetadata.from_dict({"title": None, "keywords": "x", "canonical": "/c"})
        assert head == HeadMetadata(canonical="/c")
