"""Heading location and extraction.

Two jobs: find the page's primary heading (the anchor for the hero container
search) and collect headings of a given level from inside the chosen
container.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from heroscan.exceptions import ErrorKind
from heroscan.extraction.blocks import HeadingBlock
from heroscan.extraction.markup import MarkupNode, MarkupTree, normalize_space
from heroscan.extraction.visibility import HIDING_CLASSES, is_visible

logger = structlog.get_logger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Order tried by find_primary_heading after the preferred level
PRIMARY_FALLBACK_ORDER = ("h1", "h2", "h3")

# Nested sub-labels that are not part of the heading proper
SUBTEXT_TAGS = frozenset({"small"})
SUBTEXT_CLASSES = frozenset({"subtext", "subtitle", "sub-label"})


def heading_level(tag: str) -> int:
    """``"h2"`` -> ``2``."""
    return int(tag[1])


@dataclass(frozen=True)
class HeadingLookup:
    """Outcome of the primary heading search."""

    node: MarkupNode | None
    text: str = ""
    error_kind: ErrorKind | None = None

    @property
    def found(self) -> bool:
        return self.node is not None


def _is_subtext(node: MarkupNode) -> bool:
    if node.tag in SUBTEXT_TAGS:
        return True
    return any(cls.lower() in SUBTEXT_CLASSES for cls in node.classes)


def heading_text(tree: MarkupTree, node: MarkupNode, include_subtext: bool = False) -> str:
    """Whitespace-normalized heading text, optionally without sub-labels."""
    if include_subtext:
        return normalize_space(tree.text_content(node))
    subtext_ids = [desc.node_id for desc in tree.iter_descendants(node) if _is_subtext(desc)]
    return normalize_space(tree.text_content(node, exclude=subtext_ids))


def locate_primary_heading(
    tree: MarkupTree,
    level: str = "h1",
    hiding_classes: Iterable[str] = HIDING_CLASSES,
    include_subtext: bool = False,
) -> HeadingLookup:
    """
    Find the first visible top-level heading in document order.

    Args:
        tree: Parsed markup tree
        level: Heading tag treated as top-level
        hiding_classes: Class tokens that mark an element as hidden
        include_subtext: Keep nested sub-labels in the returned text

    Returns:
        HeadingLookup; ``found`` is False with NoHeadingFound when every
        candidate is hidden or none exist
    """
    lexicon = tuple(hiding_classes)
    candidates = tree.find_all(tree.root, [level])
    for node in candidates:
        if is_visible(node, lexicon):
            return HeadingLookup(node=node, text=heading_text(tree, node, include_subtext))

    logger.debug("primary_heading_not_found", level=level, candidates=len(candidates))
    return HeadingLookup(node=None, error_kind=ErrorKind.NO_HEADING_FOUND)


class HeadingExtractor:
    """Collects headings of one level from a container."""

    def __init__(
        self,
        max_headings: int = 5,
        min_length: int = 3,
        include_subtext: bool = False,
        hiding_classes: Iterable[str] = HIDING_CLASSES,
        item_filter: Callable[[str], bool] | None = None,
    ):
        self.max_headings = max_headings
        self.min_length = min_length
        self.include_subtext = include_subtext
        self.hiding_classes = tuple(hiding_classes)
        self.item_filter = item_filter

    def extract(self, tree: MarkupTree, container: MarkupNode, level: str = "h2") -> list[HeadingBlock]:
        """
        Extract visible headings of ``level`` inside ``container``.

        Text shorter than ``min_length`` is dropped; a heading exactly
        ``min_length`` characters long is kept.
        """
        headings: list[HeadingBlock] = []
        for node in tree.find_all(container, [level]):
            if len(headings) >= self.max_headings:
                break
            if not is_visible(node, self.hiding_classes):
                continue
            text = heading_text(tree, node, self.include_subtext)
            if len(text) < self.min_length:
                continue
            if self.item_filter is not None and not self.item_filter(text):
                continue
            headings.append(HeadingBlock(level=heading_level(level), text=text))
        return headings

    def find_primary(
        self, tree: MarkupTree, container: MarkupNode, preferred_level: str = "h1"
    ) -> str | None:
        """
        Text of the main heading in a container.

        Tries the first ``preferred_level`` element, then falls back through
        h1, h2, h3 (skipping the level already tried).
        """
        levels = [preferred_level] + [lvl for lvl in PRIMARY_FALLBACK_ORDER if lvl != preferred_level]
        for level in levels:
            node = tree.find(container, [level])
            if node is not None and is_visible(node, self.hiding_classes):
                return heading_text(tree, node, self.include_subtext)
        return None


def extract_headings(
    tree: MarkupTree,
    container: MarkupNode,
    level: str = "h2",
    max_headings: int = 5,
    min_length: int = 3,
    include_subtext: bool = False,
) -> list[HeadingBlock]:
    """Convenience function to extract headings of one level."""
    extractor = HeadingExtractor(
        max_headings=max_headings, min_length=min_length, include_subtext=include_subtext
    )
    return extractor.extract(tree, container, level)


def find_primary_heading(
    tree: MarkupTree, container: MarkupNode, preferred_level: str = "h1"
) -> str | None:
    """Convenience function to find the main heading of a container."""
    return HeadingExtractor().find_primary(tree, container, preferred_level)
