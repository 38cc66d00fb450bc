"""Tests for content dimension extraction."""

import pytest

from heroscan.dimensions.extractor import DimensionExtractor, extract_dimensions
from heroscan.dimensions.models import (
    DimensionConfig,
    DimensionErrorKind,
    DimensionReport,
    DimensionResult,
)
from heroscan.dimensions.strategies import (
    DimensionContext,
    get_raw_text_from_attribute,
    get_raw_text_from_container,
    get_raw_text_with_fallback,
    process_value,
)
from heroscan.extraction.markup import MarkupNode, MarkupTree, parse_html
from heroscan.extraction.metadata import HeadMetadata
from tests.fixtures.pages import FULL_LANDING_PAGE

SERVICE_PAGE = """
<html>
<head><title>Watch Repair in Austin</title></head>
<body>
  <nav class="breadcrumb"><span>Services</span><span>  Watch   Repair </span></nav>
  <ul class="tags"><li> Rolex </li><li></li><li>Omega</li></ul>
  <div class="city">  Austin  </div>
  <a class="phone" href="tel:555-0100">Call</a>
  <div class="empty">   </div>
</body>
</html>
"""


@pytest.fixture
def service_tree() -> MarkupTree:
    return parse_html(SERVICE_PAGE)


def _single(config: dict, **kwargs) -> DimensionResult:
    report = extract_dimensions({"dim": config}, **kwargs)
    return report.results["dim"]


class TestProcessValue:
    """Tests for value normalization."""

    def test_trim_and_lower(self) -> None:
        assert process_value("  Watch Repair ") == DimensionResult.ok("watch repair")

    def test_blank_is_no_data(self) -> None:
        assert process_value("   ").error == DimensionErrorKind.NO_DATA_FOUND
        assert process_value(None).error == DimensionErrorKind.NO_DATA_FOUND


class TestTextHelpers:
    """Tests for the text lookup helpers."""

    def test_first_match_normalized(self, service_tree: MarkupTree) -> None:
        assert get_raw_text_from_container(service_tree, ".breadcrumb span:last-child") == "Watch Repair"

    def test_preserve_spacing(self, service_tree: MarkupTree) -> None:
        text = get_raw_text_from_container(service_tree, ".city", preserve_spacing=True)
        assert text == "  Austin  "

    def test_extract_all_skips_blank_matches(self, service_tree: MarkupTree) -> None:
        text = get_raw_text_from_container(service_tree, ".tags li", extract_all=True, separator=", ")
        assert text == "Rolex, Omega"

    def test_no_match_blank_or_invalid(self, service_tree: MarkupTree) -> None:
        assert get_raw_text_from_container(service_tree, ".missing") is None
        assert get_raw_text_from_container(service_tree, ".empty") is None
        assert get_raw_text_from_container(service_tree, "div[") is None

    def test_fallback_order(self, service_tree: MarkupTree) -> None:
        assert get_raw_text_with_fallback(service_tree, [".missing", ".city"]) == "Austin"
        assert get_raw_text_with_fallback(service_tree, ".missing") is None

    def test_attribute(self, service_tree: MarkupTree) -> None:
        assert get_raw_text_from_attribute(service_tree, ".phone", "href") == "tel:555-0100"
        assert get_raw_text_from_attribute(service_tree, ".phone", "title") is None
        assert get_raw_text_from_attribute(service_tree, ".missing", "href") is None
        assert get_raw_text_from_attribute(service_tree, [".city", ".phone"], "href") == "tel:555-0100"
        assert get_raw_text_from_attribute(service_tree, "a[", "href") is None


class TestStaticValue:
    """Tests for the static_value strategy."""

    def test_lower_cased(self) -> None:
        """A fixed value is trimmed and lower-cased."""
        result = _single({"extraction_method": "static_value", "value": "Watch Repair"})
        assert result.to_dict() == {"success": True, "value": "watch repair", "error": None}

    def test_missing_value(self) -> None:
        result = _single({"extraction_method": "static_value"})
        assert result.error == DimensionErrorKind.MISSING_CONFIG

    def test_blank_value(self) -> None:
        result = _single({"extraction_method": "static_value", "value": "   "})
        assert result.error == DimensionErrorKind.NO_DATA_FOUND


class TestUrlPattern:
    """Tests for the url_pattern strategy."""

    def test_capture_group(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/services/([^/]+)/([^/]+)", "extract": "$2"}
        result = _single(config, path="/services/repair/Austin-TX")
        assert result.value == "austin-tx"

    def test_no_match(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/blog/(\w+)", "extract": "$1"}
        assert _single(config, path="/services/x").error == DimensionErrorKind.INVALID_PATTERN

    def test_bad_regex(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/(unclosed", "extract": "$1"}
        assert _single(config, path="/unclosed").error == DimensionErrorKind.INVALID_PATTERN

    def test_bad_group_reference(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/(\w+)", "extract": "first"}
        assert _single(config, path="/x").error == DimensionErrorKind.INVALID_PATTERN

    def test_group_out_of_range(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/(\w+)", "extract": "$3"}
        assert _single(config, path="/x").error == DimensionErrorKind.NO_DATA_FOUND

    def test_unmatched_optional_group(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/x(/\w+)?", "extract": "$1"}
        assert _single(config, path="/x").error == DimensionErrorKind.NO_DATA_FOUND

    def test_missing_fields(self) -> None:
        config = {"extraction_method": "url_pattern", "pattern": r"/(\w+)"}
        assert _single(config, path="/x").error == DimensionErrorKind.MISSING_CONFIG


class TestContentSelector:
    """Tests for the content_selector strategy."""

    def test_found(self, service_tree: MarkupTree) -> None:
        result = _single({"extraction_method": "content_selector", "source": ".city"}, tree=service_tree)
        assert result.value == "austin"

    def test_extract_all_with_separator(self, service_tree: MarkupTree) -> None:
        config = {
            "extraction_method": "content_selector",
            "source": ".tags li",
            "extractAll": True,
            "separator": " | ",
        }
        assert _single(config, tree=service_tree).value == "rolex | omega"

    def test_not_found(self, service_tree: MarkupTree) -> None:
        result = _single({"extraction_method": "content_selector", "source": ".nope"}, tree=service_tree)
        assert result.error == DimensionErrorKind.SELECTOR_NOT_FOUND

    def test_without_tree(self) -> None:
        result = _single({"extraction_method": "content_selector", "source": ".city"})
        assert result.error == DimensionErrorKind.SELECTOR_NOT_FOUND

    def test_tree_without_selector_engine(self) -> None:
        tree = MarkupTree([MarkupNode(0, "#document")], parents=[None])
        result = _single({"extraction_method": "content_selector", "source": ".city"}, tree=tree)
        assert result.error == DimensionErrorKind.SELECTOR_NOT_FOUND

    def test_missing_source(self, service_tree: MarkupTree) -> None:
        result = _single({"extraction_method": "content_selector"}, tree=service_tree)
        assert result.error == DimensionErrorKind.MISSING_CONFIG

    def test_fallback_selectors(self, service_tree: MarkupTree) -> None:
        """A list of selectors is tried in order until one yields text."""
        config = {"extraction_method": "content_selector", "source": [".missing", ".empty", ".city"]}
        assert _single(config, tree=service_tree).value == "austin"

    def test_fallback_exhausted(self, service_tree: MarkupTree) -> None:
        config = {"extraction_method": "content_selector", "source": [".missing", ".empty"]}
        assert _single(config, tree=service_tree).error == DimensionErrorKind.SELECTOR_NOT_FOUND

    def test_empty_selector_list(self, service_tree: MarkupTree) -> None:
        result = _single({"extraction_method": "content_selector", "source": []}, tree=service_tree)
        assert result.error == DimensionErrorKind.MISSING_CONFIG

    def test_attribute(self, service_tree: MarkupTree) -> None:
        config = {"extraction_method": "content_selector", "source": ".phone", "attribute": "href"}
        assert _single(config, tree=service_tree).value == "tel:555-0100"

    def test_attribute_with_fallback(self, service_tree: MarkupTree) -> None:
        config = {
            "extraction_method": "content_selector",
            "source": [".city", "a.phone"],
            "attribute": "href",
        }
        assert _single(config, tree=service_tree).value == "tel:555-0100"

    def test_attribute_missing(self, service_tree: MarkupTree) -> None:
        config = {"extraction_method": "content_selector", "source": ".phone", "attribute": "title"}
        assert _single(config, tree=service_tree).error == DimensionErrorKind.SELECTOR_NOT_FOUND


class TestMetadata:
    """Tests for the metadata strategy."""

    def test_sources_from_tree(self) -> None:
        tree = parse_html(FULL_LANDING_PAGE)
        report = extract_dimensions(
            {
                "title": {"extraction_method": "metadata", "source": "{meta-title}"},
                "og": {"extraction_method": "metadata", "source": "{og-title}"},
                "canonical": {"extraction_method": "metadata", "source": "{canonical-url}"},
                "twitter": {"extraction_method": "metadata", "source": "{twitter-description}"},
            },
            tree=tree,
        )

        assert report.fetch_property("title") == "acme analytics | dashboards for teams"
        assert report.fetch_property("og") == "acme analytics"
        assert report.fetch_property("canonical") == "https://acme.test/analytics"
        assert report.results["twitter"].error == DimensionErrorKind.NO_DATA_FOUND

    def test_absolute_url_is_path(self) -> None:
        result = _single(
            {"extraction_method": "metadata", "source": "{absoluteurl}"},
            path="https://Acme.test/Pricing",
        )
        assert result.value == "https://acme.test/pricing"

    def test_explicit_head_wins(self) -> None:
        tree = parse_html(FULL_LANDING_PAGE)
        result = _single(
            {"extraction_method": "metadata", "source": "{meta-title}"},
            tree=tree,
            head={"title": "Given Title"},
        )
        assert result.value == "given title"

    def test_head_metadata_instance(self) -> None:
        result = _single(
            {"extraction_method": "metadata", "source": "{og-description}"},
            head=HeadMetadata(og_description="Shared Copy"),
        )
        assert result.value == "shared copy"

    def test_invalid_source(self) -> None:
        result = _single({"extraction_method": "metadata", "source": "{keywords}"})
        assert result.error == DimensionErrorKind.INVALID_SOURCE

    def test_list_source_is_invalid(self) -> None:
        """Metadata takes a single template variable, not a fallback list."""
        result = _single({"extraction_method": "metadata", "source": ["{meta-title}", "{og-title}"]})
        assert result.error == DimensionErrorKind.INVALID_SOURCE

    def test_context_sources(self) -> None:
        sources = DimensionContext(path="/p").metadata_sources()
        assert sources["{absoluteurl}"] == "/p"
        assert len(sources) == 8


class TestDimensionExtractor:
    """Tests for dispatch and reporting."""

    def test_disabled_dimension_excluded(self) -> None:
        """Disabled dimensions do not appear in the results or counts."""
        report = extract_dimensions(
            {
                "category": {"extraction_method": "static_value", "value": "Watch Repair"},
                "brand": {"extraction_method": "static_value", "value": "Rolex", "enabled": False},
            }
        )

        assert list(report.results) == ["category"]
        assert report.success_count == 1
        assert report.total_count == 1

    def test_empty_configs_skipped(self) -> None:
        report = extract_dimensions({"a": {}, "b": None})
        assert report.total_count == 0

    def test_no_dimensions(self) -> None:
        assert extract_dimensions(None).to_dict() == {
            "dimensions": {},
            "successCount": 0,
            "totalCount": 0,
        }

    def test_unknown_method(self) -> None:
        assert _single({"extraction_method": "ai_guess"}).error == DimensionErrorKind.UNKNOWN_METHOD
        assert _single({"value": "x"}).error == DimensionErrorKind.UNKNOWN_METHOD

    def test_invalid_config_is_missing_config(self) -> None:
        result = _single({"extraction_method": "static_value", "value": ["not", "a", "string"]})
        assert result.error == DimensionErrorKind.MISSING_CONFIG

    def test_invalid_but_disabled_is_skipped(self) -> None:
        report = extract_dimensions({"dim": {"value": ["x"], "enabled": False}})
        assert report.total_count == 0

    def test_failure_does_not_stop_others(self) -> None:
        report = extract_dimensions(
            {
                "bad": {"extraction_method": "metadata", "source": "{nope}"},
                "good": {"extraction_method": "static_value", "value": "Kept"},
            }
        )

        assert report.success_count == 1
        assert report.total_count == 2
        assert report.fetch_property("bad") == ""
        assert report.fetch_property("good") == "kept"
        assert report.fetch_property("absent") == ""
        assert report.properties() == {"bad": "", "good": "kept"}

    def test_model_config_accepted(self) -> None:
        config = DimensionConfig(extraction_method="static_value", value="Model")
        assert extract_dimensions({"dim": config}).fetch_property("dim") == "model"

    def test_custom_strategy(self) -> None:
        def shout(config: DimensionConfig, context: DimensionContext) -> DimensionResult:
            return DimensionResult.ok((config.value or "").upper())

        report = DimensionExtractor(strategies={"shout": shout}).extract(
            {"dim": {"extraction_method": "shout", "value": "hey"}}
        )
        assert report.fetch_property("dim") == "HEY"

    def test_to_dict(self) -> None:
        report = DimensionReport(
            results={
                "a": DimensionResult.ok("x"),
                "b": DimensionResult.failed(DimensionErrorKind.NO_DATA_FOUND),
            }
        )
        assert report.to_dict() == {
            "dimensions": {
                "a": {"success": True, "value": "x", "error": None},
                "b": {"success": False, "value": None, "error": "NoDataFound"},
            },
            "successCount": 1,
            "totalCount": 2,
        }


def test_error_kind_messages() -> None:
    assert DimensionErrorKind.SELECTOR_NOT_FOUND.message == "CSS selector found no elements"
    assert all(kind.message for kind in DimensionErrorKind)


def test_config_aliases() -> None:
    config = DimensionConfig.model_validate(
        {"extraction_method": "content_selector", "extractAll": True, "preserveSpacing": True}
    )
    assert config.extract_all
    assert config.preserve_spacing
    assert DimensionConfig(extract_all=True).extract_all
