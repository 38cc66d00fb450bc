"""Tests for extraction options and presets."""

import pytest

from heroscan.exceptions import UnknownPresetError
from heroscan.extraction.options import DEFAULT_PRESET, PRESETS, HeroExtractionOptions


class TestDefaults:
    """Tests for default option values."""

    def test_defaults(self) -> None:
        options = HeroExtractionOptions()

        assert options.max_depth == 5
        assert options.max_buttons == 5
        assert options.max_images == 3
        assert options.min_content_length == 20
        assert options.max_content_length == 500
        assert options.include_submit
        assert options.exclude_icons
        assert not options.prefilter_items
        assert "d-none" in options.hiding_classes

    def test_standard_preset_is_defaults(self) -> None:
        assert PRESETS[DEFAULT_PRESET] == HeroExtractionOptions()


class TestValidation:
    """Tests for option validation."""

    def test_negative_int_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_buttons"):
            HeroExtractionOptions(max_buttons=-1)

    def test_zero_is_allowed(self) -> None:
        assert HeroExtractionOptions(max_images=0).max_images == 0

    def test_bool_for_int_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_depth"):
            HeroExtractionOptions(max_depth=True)

    def test_string_for_bool_rejected(self) -> None:
        with pytest.raises(ValueError, match="include_links"):
            HeroExtractionOptions(include_links="yes")

    def test_bad_heading_level(self) -> None:
        with pytest.raises(ValueError, match="preferred_heading_level"):
            HeroExtractionOptions(preferred_heading_level="h7")

    def test_inverted_content_window(self) -> None:
        with pytest.raises(ValueError):
            HeroExtractionOptions(min_content_length=600, max_content_length=500)

    def test_hiding_classes_become_tuple(self) -> None:
        options = HeroExtractionOptions(hiding_classes=["sr-only"])
        assert options.hiding_classes == ("sr-only",)
        hash(options)

    def test_hiding_classes_string_rejected(self) -> None:
        """A bare string is not split into single-letter class names."""
        with pytest.raises(ValueError, match="hiding_classes"):
            HeroExtractionOptions.from_mapping({"hidingClasses": "sr-only"})

    def test_hiding_classes_non_string_item_rejected(self) -> None:
        with pytest.raises(ValueError, match="hiding_classes"):
            HeroExtractionOptions(hiding_classes=["sr-only", 3])

    def test_hiding_classes_from_list(self) -> None:
        options = HeroExtractionOptions.from_mapping({"hidingClasses": ["sr-only", "is-hidden"]})
        assert options.hiding_classes == ("sr-only", "is-hidden")


class TestPresets:
    """Tests for named presets."""

    def test_available(self) -> None:
        assert sorted(PRESETS) == ["lenient", "standard", "strict"]

    def test_strict_tightens(self) -> None:
        strict = HeroExtractionOptions.preset("strict")

        assert strict.max_buttons < PRESETS["standard"].max_buttons
        assert strict.min_content_length > PRESETS["standard"].min_content_length
        assert not strict.include_submit
        assert strict.prefilter_items

    def test_lenient_loosens(self) -> None:
        lenient = HeroExtractionOptions.preset("lenient")

        assert lenient.max_depth > PRESETS["standard"].max_depth
        assert lenient.min_width < PRESETS["standard"].min_width
        assert not lenient.exclude_logos

    def test_preset_overrides(self) -> None:
        options = HeroExtractionOptions.preset("strict", max_buttons=1)

        assert options.max_buttons == 1
        assert options.max_images == PRESETS["strict"].max_images

    def test_unknown_preset(self) -> None:
        with pytest.raises(UnknownPresetError) as exc_info:
            HeroExtractionOptions.preset("aggressive")

        assert exc_info.value.status_code == 422
        assert exc_info.value.details == {"available": ["lenient", "standard", "strict"]}


class TestOverrides:
    """Tests for mapping-based overrides."""

    def test_camel_and_snake_keys(self) -> None:
        options = HeroExtractionOptions.from_mapping({"maxButtons": 2, "min_width": 50})

        assert options.max_buttons == 2
        assert options.min_width == 50

    def test_overrides_keep_base(self) -> None:
        options = PRESETS["strict"].with_overrides({"includeSubmit": True})

        assert options.include_submit
        assert options.max_depth == PRESETS["strict"].max_depth

    def test_empty_mapping(self) -> None:
        base = PRESETS["lenient"]
        assert base.with_overrides(None) is base
        assert HeroExtractionOptions.from_mapping({}) == HeroExtractionOptions()

    def test_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="maxWidgets"):
            HeroExtractionOptions.from_mapping({"maxWidgets": 3})

    def test_invalid_value(self) -> None:
        with pytest.raises(ValueError):
            HeroExtractionOptions.from_mapping({"maxDepth": "deep"})

    def test_to_dict_roundtrip(self) -> None:
        options = PRESETS["strict"]
        assert HeroExtractionOptions(**options.to_dict()) == options
