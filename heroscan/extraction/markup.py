"""Generic markup tree used by every extractor.

The tree is an arena: nodes live in one list indexed by ``node_id`` and the
only upward link is the tree's parent table. Ids are assigned in document
pre-order, so the descendants of node ``n`` are exactly the ids
``n + 1 .. n + subtree_size(n)``. Containment checks and descendant scans are
range operations and never walk parent pointers.

Parsing HTML is not this module's job. ``build_tree`` adapts an already
parsed BeautifulSoup document and injects its CSS engine as the tree's
selector; ``parse_html`` is the default parser wired into the pipeline.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

import structlog
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString
from soupsieve import SelectorSyntaxError

from heroscan.exceptions import ParserUnavailableError

logger = structlog.get_logger(__name__)

DOCUMENT_TAG = "#document"

# Text inside these never counts as visible text content
NON_TEXT_TAGS = frozenset({"script", "style", "template"})

# A selector engine maps a CSS query to matching node ids in document order
Selector = Callable[[str], list[int]]


class SelectorQueryError(ValueError):
    """A CSS query could not be parsed by the selector engine."""


@dataclass(frozen=True, eq=False)
class MarkupNode:
    """A single element in the markup tree."""

    node_id: int
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    # Text strings and child node ids, in document order
    segments: tuple[str | int, ...] = ()
    children: tuple[int, ...] = ()

    def get(self, name: str, default: str = "") -> str:
        return self.attrs.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attrs

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self.attrs.get("class", "").split())

    @property
    def class_string(self) -> str:
        return " ".join(self.classes)

    @property
    def element_id(self) -> str:
        return self.attrs.get("id", "")

    @property
    def style(self) -> str:
        return self.attrs.get("style", "")

    def __repr__(self) -> str:
        ident = f"#{self.element_id}" if self.element_id else ""
        cls = "".join(f".{c}" for c in self.classes)
        return f"<MarkupNode {self.node_id} {self.tag}{ident}{cls}>"


class MarkupTree:
    """Arena of ``MarkupNode`` objects plus the parent table."""

    def __init__(
        self,
        nodes: list[MarkupNode],
        parents: list[int | None],
        selector: Selector | None = None,
    ):
        if len(nodes) != len(parents):
            raise ValueError("nodes and parents must be the same length")
        self._nodes = nodes
        self._parents = parents
        self._selector = selector
        self._sizes = self._compute_subtree_sizes()

    def _compute_subtree_sizes(self) -> list[int]:
        # Reverse pre-order visits every child before its parent
        sizes = [0] * len(self._nodes)
        for node_id in range(len(self._nodes) - 1, 0, -1):
            parent = self._parents[node_id]
            if parent is not None:
                sizes[parent] += sizes[node_id] + 1
        return sizes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> MarkupNode:
        return self._nodes[0]

    @property
    def has_selector(self) -> bool:
        return self._selector is not None

    def node(self, node_id: int) -> MarkupNode:
        return self._nodes[node_id]

    def parent(self, node: MarkupNode) -> MarkupNode | None:
        parent_id = self._parents[node.node_id]
        return None if parent_id is None else self._nodes[parent_id]

    def ancestors(self, node: MarkupNode) -> Iterator[MarkupNode]:
        """Yield ancestors from the parent upward, never revisiting a node."""
        seen = {node.node_id}
        parent_id = self._parents[node.node_id]
        while parent_id is not None and parent_id not in seen:
            seen.add(parent_id)
            yield self._nodes[parent_id]
            parent_id = self._parents[parent_id]

    def child_nodes(self, node: MarkupNode) -> list[MarkupNode]:
        return [self._nodes[child_id] for child_id in node.children]

    def descendant_count(self, node: MarkupNode) -> int:
        return self._sizes[node.node_id]

    def iter_descendants(self, node: MarkupNode) -> Iterator[MarkupNode]:
        """Yield element descendants in document order."""
        start = node.node_id + 1
        yield from self._nodes[start : start + self._sizes[node.node_id]]

    def contains(self, ancestor: MarkupNode, node: MarkupNode) -> bool:
        """True when ``node`` is a strict descendant of ``ancestor``."""
        offset = node.node_id - ancestor.node_id
        return 0 < offset <= self._sizes[ancestor.node_id]

    def find_all(self, node: MarkupNode, tags: Iterable[str]) -> list[MarkupNode]:
        wanted = frozenset(tags)
        return [desc for desc in self.iter_descendants(node) if desc.tag in wanted]

    def find(self, node: MarkupNode, tags: Iterable[str]) -> MarkupNode | None:
        wanted = frozenset(tags)
        for desc in self.iter_descendants(node):
            if desc.tag in wanted:
                return desc
        return None

    def text_content(self, node: MarkupNode, exclude: Iterable[int] = ()) -> str:
        """Concatenated text of ``node`` and its descendants.

        Subtrees rooted at ids in ``exclude`` are skipped, as is the text of
        script/style/template elements.
        """
        skipped = frozenset(exclude)
        parts: list[str] = []
        stack: list[str | int] = [node.node_id]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue
            current = self._nodes[item]
            if current.tag in NON_TEXT_TAGS or (item in skipped and item != node.node_id):
                continue
            stack.extend(reversed(current.segments))
        return "".join(parts)

    def select(self, query: str) -> list[MarkupNode]:
        """Run a CSS query through the injected selector engine."""
        if self._selector is None:
            raise ParserUnavailableError("This tree was built without a selector engine")
        return [self._nodes[node_id] for node_id in self._selector(query)]


def normalize_space(text: str) -> str:
    """Collapse runs of whitespace and trim."""
    return " ".join(text.split())


def _attr_value(value: Any) -> str:
    # bs4 returns multi-valued attributes such as class as lists
    if isinstance(value, list | tuple):
        return " ".join(str(v) for v in value)
    return "" if value is None else str(value)


def build_tree(soup: BeautifulSoup | Tag) -> MarkupTree:
    """Adapt a parsed BeautifulSoup document into a ``MarkupTree``.

    The walk is iterative so deeply nested documents cannot exhaust the
    recursion limit. Comments, doctypes and processing instructions are
    dropped.
    """
    tags: list[str] = []
    attrs: list[dict[str, str]] = []
    segments: list[list[str | int]] = []
    children: list[list[int]] = []
    parents: list[int | None] = []
    by_identity: dict[int, int] = {}

    # (element, parent id, slot in the parent's segment list)
    stack: list[tuple[Tag, int | None, int]] = [(soup, None, -1)]
    while stack:
        element, parent_id, slot = stack.pop()
        node_id = len(tags)
        by_identity[id(element)] = node_id

        is_document = isinstance(element, BeautifulSoup)
        tags.append(DOCUMENT_TAG if is_document else (element.name or "").lower())
        attrs.append(
            {} if is_document else {k.lower(): _attr_value(v) for k, v in element.attrs.items()}
        )
        parents.append(parent_id)
        own_segments: list[str | int] = []
        segments.append(own_segments)
        children.append([])

        if parent_id is not None:
            segments[parent_id][slot] = node_id
            children[parent_id].append(node_id)

        pending: list[tuple[Tag, int | None, int]] = []
        for child in element.children:
            if isinstance(child, Tag):
                own_segments.append(-1)
                pending.append((child, node_id, len(own_segments) - 1))
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                own_segments.append(str(child))
        stack.extend(reversed(pending))

    nodes = [
        MarkupNode(
            node_id=i,
            tag=tags[i],
            attrs=attrs[i],
            segments=tuple(segments[i]),
            children=tuple(children[i]),
        )
        for i in range(len(tags))
    ]

    def select(query: str) -> list[int]:
        try:
            matches = soup.select(query)
        except SelectorSyntaxError as e:
            raise SelectorQueryError(f"Invalid selector '{query}': {e}") from e
        return [by_identity[id(m)] for m in matches if id(m) in by_identity]

    return MarkupTree(nodes, parents, selector=select)


def parse_html(html: str, features: str = "html.parser") -> MarkupTree:
    """Default parser: BeautifulSoup with the stdlib HTML backend."""
    soup = BeautifulSoup(html, features)
    tree = build_tree(soup)
    logger.debug("markup_tree_built", nodes=len(tree), html_size=len(html))
    return tree
