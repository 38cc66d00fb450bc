"""The four dimension extraction strategies and their text helpers.

Each strategy takes a validated config plus the shared context and returns a
``DimensionResult``. Strategies report failure through the result, they do
not raise.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from heroscan.dimensions.models import (
    DimensionConfig,
    DimensionErrorKind,
    DimensionResult,
    ExtractionMethod,
)
from heroscan.extraction.markup import MarkupTree, SelectorQueryError, normalize_space
from heroscan.extraction.metadata import HeadMetadata

logger = structlog.get_logger(__name__)

GROUP_REFERENCE = re.compile(r"^\$(\d+)$")


@dataclass(frozen=True)
class DimensionContext:
    """Everything a strategy may read from."""

    tree: MarkupTree | None = None
    path: str = ""
    head: HeadMetadata = field(default_factory=HeadMetadata)

    def metadata_sources(self) -> dict[str, str]:
        """Template variable -> value for the metadata strategy."""
        return {
            "{meta-title}": self.head.title,
            "{meta-description}": self.head.description,
            "{og-title}": self.head.og_title,
            "{og-description}": self.head.og_description,
            "{twitter-title}": self.head.twitter_title,
            "{twitter-description}": self.head.twitter_description,
            "{canonical-url}": self.head.canonical,
            "{absoluteurl}": self.path,
        }


Strategy = Callable[[DimensionConfig, DimensionContext], DimensionResult]


def process_value(raw: str | None) -> DimensionResult:
    """Trim and lower-case; blank input is NoDataFound."""
    if raw is None or not raw.strip():
        return DimensionResult.failed(DimensionErrorKind.NO_DATA_FOUND)
    return DimensionResult.ok(raw.strip().lower())


def get_raw_text_from_container(
    tree: MarkupTree,
    selector: str,
    extract_all: bool = False,
    separator: str = " ",
    preserve_spacing: bool = False,
) -> str | None:
    """
    Text of the first element matching ``selector``.

    Args:
        tree: Tree to query
        selector: CSS selector
        extract_all: Join the trimmed text of every match instead
        separator: Joiner used with ``extract_all``
        preserve_spacing: Keep the original whitespace

    Returns:
        The text, or None when nothing matches, the match is blank or the
        selector is invalid
    """
    try:
        matches = tree.select(selector)
    except SelectorQueryError as e:
        logger.debug("dimension_selector_invalid", selector=selector, error=str(e))
        return None

    if not matches:
        return None

    if extract_all and len(matches) > 1:
        parts = [tree.text_content(m).strip() for m in matches]
        raw = separator.join(p for p in parts if p)
    else:
        raw = tree.text_content(matches[0])

    if not raw.strip():
        return None
    return raw if preserve_spacing else normalize_space(raw)


def get_raw_text_with_fallback(
    tree: MarkupTree, selectors: str | list[str], **options
) -> str | None:
    """First non-empty text from a list of selectors, tried in order."""
    candidates = [selectors] if isinstance(selectors, str) else selectors
    for selector in candidates:
        text = get_raw_text_from_container(tree, selector, **options)
        if text:
            return text
    return None


def get_raw_text_from_attribute(
    tree: MarkupTree, selectors: str | list[str], attribute: str
) -> str | None:
    """Trimmed ``attribute`` of the first match of the first selector that has one."""
    candidates = [selectors] if isinstance(selectors, str) else selectors
    for selector in candidates:
        try:
            matches = tree.select(selector)
        except SelectorQueryError as e:
            logger.debug("dimension_selector_invalid", selector=selector, error=str(e))
            continue
        if matches:
            value = matches[0].get(attribute).strip()
            if value:
                return value
    return None


def extract_url_pattern(config: DimensionConfig, context: DimensionContext) -> DimensionResult:
    if not config.pattern or not config.extract:
        return DimensionResult.failed(DimensionErrorKind.MISSING_CONFIG)

    reference = GROUP_REFERENCE.match(config.extract.strip())
    if reference is None:
        return DimensionResult.failed(DimensionErrorKind.INVALID_PATTERN)

    try:
        match = re.search(config.pattern, context.path)
    except re.error as e:
        logger.debug("dimension_pattern_invalid", pattern=config.pattern, error=str(e))
        return DimensionResult.failed(DimensionErrorKind.INVALID_PATTERN)
    if match is None:
        return DimensionResult.failed(DimensionErrorKind.INVALID_PATTERN)

    group = int(reference.group(1))
    if group > (match.re.groups or 0):
        return DimensionResult.failed(DimensionErrorKind.NO_DATA_FOUND)
    return process_value(match.group(group))


def extract_content_selector(config: DimensionConfig, context: DimensionContext) -> DimensionResult:
    if not config.source:
        return DimensionResult.failed(DimensionErrorKind.MISSING_CONFIG)
    if context.tree is None or not context.tree.has_selector:
        logger.debug("dimension_selector_without_tree", source=config.source)
        return DimensionResult.failed(DimensionErrorKind.SELECTOR_NOT_FOUND)

    if config.attribute:
        raw = get_raw_text_from_attribute(context.tree, config.source, config.attribute)
    else:
        raw = get_raw_text_with_fallback(
            context.tree,
            config.source,
            extract_all=config.extract_all,
            separator=config.separator,
            preserve_spacing=config.preserve_spacing,
        )
    if raw is None:
        return DimensionResult.failed(DimensionErrorKind.SELECTOR_NOT_FOUND)
    return process_value(raw)


def extract_static_value(config: DimensionConfig, context: DimensionContext) -> DimensionResult:
    if not config.value:
        return DimensionResult.failed(DimensionErrorKind.MISSING_CONFIG)
    return process_value(config.value)


def extract_metadata(config: DimensionConfig, context: DimensionContext) -> DimensionResult:
    if not config.source:
        return DimensionResult.failed(DimensionErrorKind.MISSING_CONFIG)

    sources = context.metadata_sources()
    if not isinstance(config.source, str) or config.source not in sources:
        logger.debug(
            "dimension_metadata_source_invalid",
            source=config.source,
            available=list(sources),
        )
        return DimensionResult.failed(DimensionErrorKind.INVALID_SOURCE)
    return process_value(sources[config.source])


STRATEGIES: dict[str, Strategy] = {
    ExtractionMethod.URL_PATTERN: extract_url_pattern,
    ExtractionMethod.CONTENT_SELECTOR: extract_content_selector,
    ExtractionMethod.STATIC_VALUE: extract_static_value,
    ExtractionMethod.METADATA: extract_metadata,
}
