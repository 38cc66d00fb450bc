"""Static visibility heuristics.

There is no layout engine here, so "visible" only means the element is not
hidden by markup: no ``hidden`` attribute, no inline ``display:none`` or
``visibility:hidden``, and no class from the hiding lexicon.
"""

import re
from collections.abc import Iterable

from heroscan.extraction.markup import MarkupNode

HIDING_CLASSES = frozenset({"hidden", "hide", "d-none", "invisible"})

HIDDEN_STYLE_PATTERNS = [
    re.compile(r"display\s*:\s*none", re.IGNORECASE),
    re.compile(r"visibility\s*:\s*hidden", re.IGNORECASE),
]


def has_hidden_style(node: MarkupNode) -> bool:
    """Check if the element is hidden via inline style."""
    style = node.style
    if not style:
        return False
    return any(p.search(style) for p in HIDDEN_STYLE_PATTERNS)


def is_visible(node: MarkupNode, hiding_classes: Iterable[str] = HIDING_CLASSES) -> bool:
    """Check a single element (not its ancestors) against the hiding rules."""
    if node.has("hidden"):
        return False
    if has_hidden_style(node):
        return False
    # Whole class tokens only, so "overflow-hidden" stays visible
    lexicon = {c.lower() for c in hiding_classes}
    return not any(cls.lower() in lexicon for cls in node.classes)
