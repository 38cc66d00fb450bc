"""Hero container search.

Starting from the primary heading, walk up a bounded number of ancestors and
stop at the first one that either names itself as a hero section (semantic
match) or carries enough hero-like content around the heading (structural
score). The closest qualifying ancestor always wins.

Structural signals for every node come from ``StructuralIndex``, built in one
bottom-up pass, so scoring an ancestor never rescans its subtree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import structlog

from heroscan.extraction.buttons import is_button_like
from heroscan.extraction.images import is_likely_icon
from heroscan.extraction.markup import DOCUMENT_TAG, MarkupNode, MarkupTree

logger = structlog.get_logger(__name__)

HERO_KEYWORDS = (
    "hero",
    "jumbotron",
    "banner",
    "header-content",
    "page-header",
    "intro",
    "landing",
    "above-fold",
    "masthead",
    "showcase",
    "feature",
    "splash",
)

# Ascent stops here; these wrap the whole page
BOUNDARY_TAGS = frozenset({DOCUMENT_TAG, "html", "body"})

DESCRIPTION_CLASSES = frozenset({"content", "description"})

QUALIFYING_SCORE = 3.0

# Structural weights
HEADING_WEIGHT = 2.0
BUTTON_WEIGHT = 1.0
CONTENT_WEIGHT = 1.0
IMAGE_WEIGHT = 0.5

# (descendant count above which, penalty)
SIZE_PENALTIES = ((100, 2.0), (200, 1.0))

# Signal bits
HEADING = 1
BUTTON = 2
CONTENT = 4
IMAGE = 8


class ContainerMethod(StrEnum):
    """How the container was chosen."""

    SEMANTIC = "semantic"
    STRUCTURAL = "structural"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class CandidateContainer:
    """The chosen container and why it was chosen."""

    node: MarkupNode
    depth: int  # Ancestor distance from the heading's parent (0 = parent)
    score: float
    method: ContainerMethod
    matched_keyword: str | None = None

    @property
    def identified(self) -> bool:
        """True only when the markup named the section as a hero."""
        return self.method == ContainerMethod.SEMANTIC

    def to_dict(self) -> dict:
        return {
            "tag": self.node.tag,
            "classes": self.node.class_string,
            "id": self.node.element_id,
            "depth": self.depth,
            "score": self.score,
            "method": self.method.value,
            "keyword": self.matched_keyword,
        }


def _own_signals(node: MarkupNode) -> int:
    signals = 0
    if node.tag in ("h1", "h2"):
        signals |= HEADING
    if is_button_like(node):
        signals |= BUTTON
    if node.tag == "p" or (
        node.tag == "div" and any(cls.lower() in DESCRIPTION_CLASSES for cls in node.classes)
    ):
        signals |= CONTENT
    if node.tag == "img" and not is_likely_icon(node):
        signals |= IMAGE
    return signals


class StructuralIndex:
    """Per-node descendant signals computed once per tree.

    ``signals(node)`` is the OR of the signal bits of every strict
    descendant of ``node``.
    """

    def __init__(self, tree: MarkupTree):
        self.tree = tree
        own = [_own_signals(tree.node(i)) for i in range(len(tree))]
        below = [0] * len(tree)
        # Reverse pre-order: children are folded in before their parent
        for node_id in range(len(tree) - 1, 0, -1):
            parent = tree.parent(tree.node(node_id))
            if parent is not None:
                below[parent.node_id] |= below[node_id] | own[node_id]
        self._below = below

    def signals(self, node: MarkupNode) -> int:
        return self._below[node.node_id]

    def descendant_count(self, node: MarkupNode) -> int:
        return self.tree.descendant_count(node)

    def structural_score(self, node: MarkupNode) -> float:
        """Heading/button/content/image presence minus the size penalty."""
        signals = self.signals(node)
        score = 0.0
        if signals & HEADING:
            score += HEADING_WEIGHT
        if signals & BUTTON:
            score += BUTTON_WEIGHT
        if signals & CONTENT:
            score += CONTENT_WEIGHT
        if signals & IMAGE:
            score += IMAGE_WEIGHT

        count = self.descendant_count(node)
        for threshold, penalty in SIZE_PENALTIES:
            if count > threshold:
                score -= penalty
        return score


def semantic_keyword(node: MarkupNode, keywords: tuple[str, ...] = HERO_KEYWORDS) -> str | None:
    """First hero keyword found in class, id, data-section or role."""
    identifiers = " ".join(
        [node.class_string, node.element_id, node.get("data-section"), node.get("role")]
    ).lower()
    for keyword in keywords:
        if keyword in identifiers:
            return keyword
    return None


class ContainerLocator:
    """Bounded ancestor search for the hero container."""

    def __init__(
        self,
        max_depth: int = 5,
        keywords: tuple[str, ...] = HERO_KEYWORDS,
        qualifying_score: float = QUALIFYING_SCORE,
    ):
        self.max_depth = max_depth
        self.keywords = keywords
        self.qualifying_score = qualifying_score

    def locate(
        self,
        tree: MarkupTree,
        heading: MarkupNode,
        index: StructuralIndex | None = None,
    ) -> CandidateContainer:
        """
        Find the hero container around ``heading``.

        Args:
            tree: Tree the heading belongs to
            heading: The primary heading node
            index: Prebuilt structural index (built on demand otherwise)

        Returns:
            CandidateContainer. The method is ``fallback`` (the heading's
            parent) when no ancestor qualified before the page boundary or
            the depth limit.
        """
        parent = tree.parent(heading)
        if parent is None:
            raise ValueError("heading has no parent; it cannot be the tree root")

        index = index or StructuralIndex(tree)
        candidate: MarkupNode | None = parent
        depth = 0

        while candidate is not None and depth < self.max_depth:
            if candidate.tag in BOUNDARY_TAGS:
                break

            keyword = semantic_keyword(candidate, self.keywords)
            if keyword is not None:
                return self._chosen(
                    CandidateContainer(
                        node=candidate,
                        depth=depth,
                        score=index.structural_score(candidate),
                        method=ContainerMethod.SEMANTIC,
                        matched_keyword=keyword,
                    )
                )

            score = index.structural_score(candidate)
            if score >= self.qualifying_score:
                return self._chosen(
                    CandidateContainer(
                        node=candidate,
                        depth=depth,
                        score=score,
                        method=ContainerMethod.STRUCTURAL,
                    )
                )

            candidate = tree.parent(candidate)
            depth += 1

        return self._chosen(
            CandidateContainer(
                node=parent,
                depth=0,
                score=index.structural_score(parent),
                method=ContainerMethod.FALLBACK,
            )
        )

    def _chosen(self, container: CandidateContainer) -> CandidateContainer:
        logger.debug(
            "hero_container_located",
            method=container.method.value,
            depth=container.depth,
            score=container.score,
            keyword=container.matched_keyword,
            tag=container.node.tag,
        )
        return container


def locate_container(tree: MarkupTree, heading: MarkupNode, max_depth: int = 5) -> CandidateContainer:
    """Convenience function to find the hero container for a heading."""
    return ContainerLocator(max_depth=max_depth).locate(tree, heading)
