"""Descriptive body text extraction.

Collects ``p`` elements and text-dense ``div`` elements (few child elements,
no block children of their own) whose text length falls in a window, and
drops footer-style boilerplate.
"""

import re
from collections.abc import Callable

import structlog

from heroscan.extraction.blocks import ParagraphBlock
from heroscan.extraction.markup import MarkupNode, MarkupTree, normalize_space

logger = structlog.get_logger(__name__)

# A div with this many descendant elements or more is layout, not text
TEXT_DIV_MAX_ELEMENTS = 3

# A div holding any of these is a wrapper; the inner nodes are scanned instead
BLOCK_TAGS = frozenset({"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "button", "ul", "ol", "table"})

COPYRIGHT_PATTERN = re.compile(r"©|\bcopyright\b", re.IGNORECASE)
RIGHTS_RESERVED_PATTERN = re.compile(r"all rights reserved", re.IGNORECASE)
BUSINESS_HOURS_PATTERNS = [
    re.compile(r"\bGMT\b"),
    re.compile(r"\bmon(?:day)?\s*[-–]\s*fri(?:day)?\b", re.IGNORECASE),
    re.compile(
        r"\b\d{1,2}(?::\d{2})?\s*[ap]\.?m\.?\s*[-–]\s*\d{1,2}(?::\d{2})?\s*[ap]\.?m\b",
        re.IGNORECASE,
    ),
]
LEADING_YEAR_PATTERN = re.compile(r"^\d{4}")


def has_copyright(text: str) -> bool:
    return bool(COPYRIGHT_PATTERN.search(text))


def has_rights_reserved(text: str) -> bool:
    return bool(RIGHTS_RESERVED_PATTERN.search(text))


def has_business_hours(text: str) -> bool:
    return any(p.search(text) for p in BUSINESS_HOURS_PATTERNS)


def starts_with_year(text: str) -> bool:
    return bool(LEADING_YEAR_PATTERN.match(text))


BOILERPLATE_PREDICATES: list[Callable[[str], bool]] = [
    has_copyright,
    has_rights_reserved,
    has_business_hours,
    starts_with_year,
]


def is_boilerplate(text: str) -> bool:
    """Footer, legal or opening-hours text rather than hero copy."""
    return any(check(text) for check in BOILERPLATE_PREDICATES)


def is_text_dense_div(tree: MarkupTree, node: MarkupNode) -> bool:
    if node.tag != "div":
        return False
    if tree.descendant_count(node) >= TEXT_DIV_MAX_ELEMENTS:
        return False
    return not any(desc.tag in BLOCK_TAGS for desc in tree.iter_descendants(node))


class ParagraphExtractor:
    """Extracts body text blocks from a container."""

    def __init__(
        self,
        min_length: int = 20,
        max_length: int = 500,
        max_blocks: int = 5,
        item_filter: Callable[[str], bool] | None = None,
    ):
        self.min_length = min_length
        self.max_length = max_length
        self.max_blocks = max_blocks
        self.item_filter = item_filter

    def extract(self, tree: MarkupTree, container: MarkupNode) -> list[ParagraphBlock]:
        """
        Extract paragraph text in document order.

        Length bounds are inclusive on both ends. Repeated text is kept once.
        """
        blocks: list[ParagraphBlock] = []
        seen_text: set[str] = set()

        for node in tree.iter_descendants(container):
            if len(blocks) >= self.max_blocks:
                break
            if node.tag != "p" and not is_text_dense_div(tree, node):
                continue

            text = normalize_space(tree.text_content(node))
            if not self.min_length <= len(text) <= self.max_length:
                continue
            if text in seen_text or is_boilerplate(text):
                continue
            if self.item_filter is not None and not self.item_filter(text):
                continue

            seen_text.add(text)
            blocks.append(ParagraphBlock(text=text))

        logger.debug("paragraphs_extracted", kept=len(blocks))
        return blocks


def extract_paragraphs(
    tree: MarkupTree,
    container: MarkupNode,
    min_length: int = 20,
    max_length: int = 500,
    max_blocks: int = 5,
) -> list[ParagraphBlock]:
    """Convenience function to extract body text."""
    extractor = ParagraphExtractor(
        min_length=min_length, max_length=max_length, max_blocks=max_blocks
    )
    return extractor.extract(tree, container)
