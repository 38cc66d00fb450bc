"""Call-to-action button extraction.

Candidates come from several overlapping selector classes (native buttons,
CTA-classed anchors, ARIA buttons, submit inputs). Overlap is resolved by
node identity, navigation labels are dropped, and what remains is ranked by a
small priority score.
"""

import re
from collections.abc import Callable

import structlog

from heroscan.extraction.blocks import ButtonBlock, ControlType
from heroscan.extraction.markup import MarkupNode, MarkupTree, normalize_space

logger = structlog.get_logger(__name__)

# Exact (case-insensitive) labels that are navigation, not calls to action
NAVIGATION_TERMS = frozenset(
    {"home", "about", "contact", "blog", "news", "login", "sign in", "menu", "search"}
)

ACTION_VERBS = ("get", "start", "try", "buy", "call", "book", "schedule")

# Class keyword -> priority bonus; groups are checked independently
CLASS_PRIORITY_BONUSES: list[tuple[tuple[str, ...], int]] = [
    (("primary", "cta"), 3),
    (("hero",), 2),
    (("large", "lg"), 1),
]

FONT_SIZE_PATTERN = re.compile(r"font-size\s*:\s*(\d+)", re.IGNORECASE)

BUTTON_CLASS_TOKENS = frozenset({"btn", "button"})


def _class_contains(node: MarkupNode, needle: str) -> bool:
    return needle in node.class_string.lower()


def _has_button_class(node: MarkupNode) -> bool:
    return any(cls.lower() in BUTTON_CLASS_TOKENS for cls in node.classes)


def is_button_like(node: MarkupNode) -> bool:
    """Native button, button/CTA-classed anchor, or ``role=button``."""
    if node.tag == "button":
        return True
    if node.get("role").lower() == "button":
        return True
    return node.tag == "a" and (_has_button_class(node) or _class_contains(node, "cta"))


def _candidate_selectors(include_submit: bool) -> list[Callable[[MarkupNode], bool]]:
    """Selector classes in the order candidates are gathered."""
    selectors: list[Callable[[MarkupNode], bool]] = [
        lambda n: n.tag == "button",
        lambda n: n.tag == "a" and "btn" in n.classes,
        lambda n: n.tag == "a" and "button" in n.classes,
        lambda n: n.get("role").lower() == "button",
        lambda n: n.tag == "a" and _class_contains(n, "cta"),
        lambda n: n.tag == "a" and _class_contains(n, "action"),
        lambda n: n.tag == "a" and _class_contains(n, "primary"),
        lambda n: n.tag == "a" and _class_contains(n, "hero-link"),
    ]
    if include_submit:
        selectors.append(lambda n: n.tag == "input" and n.get("type").lower() == "submit")
    return selectors


def is_button_candidate(node: MarkupNode, include_submit: bool = True) -> bool:
    """True when any candidate selector class matches ``node``."""
    return any(matches(node) for matches in _candidate_selectors(include_submit))


def control_type(node: MarkupNode) -> ControlType:
    if node.tag == "button":
        return ControlType.BUTTON
    if node.tag == "input":
        return ControlType.SUBMIT
    if node.tag == "a":
        return ControlType.LINK_BUTTON
    return ControlType.CUSTOM


def is_navigation_label(text: str) -> bool:
    return text.lower() in NAVIGATION_TERMS


def button_priority(node: MarkupNode, text: str) -> int:
    """
    Rank a button by how much it looks like the primary CTA.

    Class keywords (primary/cta +3, hero +2, large/lg +1), an action verb in
    the label (+2) and an inline font size above 16 (+1).
    """
    priority = 0
    classes = node.class_string.lower()
    for keywords, bonus in CLASS_PRIORITY_BONUSES:
        if any(k in classes for k in keywords):
            priority += bonus

    lowered = text.lower()
    if any(verb in lowered for verb in ACTION_VERBS):
        priority += 2

    match = FONT_SIZE_PATTERN.search(node.style)
    if match and int(match.group(1)) > 16:
        priority += 1

    return priority


class ButtonExtractor:
    """Extracts CTA buttons from a container."""

    def __init__(
        self,
        max_buttons: int = 5,
        include_submit: bool = True,
        item_filter: Callable[[ButtonBlock], bool] | None = None,
    ):
        self.max_buttons = max_buttons
        self.include_submit = include_submit
        self.item_filter = item_filter

    def extract(self, tree: MarkupTree, container: MarkupNode) -> list[ButtonBlock]:
        """
        Extract buttons inside ``container``, highest priority first.

        Buttons with equal priority stay in document order.
        """
        descendants = list(tree.iter_descendants(container))
        seen: set[int] = set()
        buttons: list[tuple[int, ButtonBlock]] = []

        for matches in _candidate_selectors(self.include_submit):
            for node in descendants:
                if node.node_id in seen or not matches(node):
                    continue
                seen.add(node.node_id)

                button = self._build_button(tree, node)
                if button is None:
                    continue
                if self.item_filter is not None and not self.item_filter(button):
                    continue
                buttons.append((node.node_id, button))

        # Priority first, document order among ties
        ranked = [b for _, b in sorted(buttons, key=lambda item: (-item[1].priority, item[0]))]
        logger.debug("buttons_extracted", candidates=len(seen), kept=len(ranked))
        return ranked[: self.max_buttons]

    def _build_button(self, tree: MarkupTree, node: MarkupNode) -> ButtonBlock | None:
        text = normalize_space(tree.text_content(node))
        if not text and node.tag == "input":
            text = normalize_space(node.get("value"))
        if not text or is_navigation_label(text):
            return None

        return ButtonBlock(
            text=text,
            control_type=control_type(node),
            href=node.get("href") or node.get("data-href") or None,
            classes=node.class_string,
            priority=button_priority(node, text),
            onclick=node.get("onclick") or None,
        )


def extract_buttons(
    tree: MarkupTree,
    container: MarkupNode,
    max_buttons: int = 5,
    include_submit: bool = True,
) -> list[ButtonBlock]:
    """Convenience function to extract CTA buttons."""
    extractor = ButtonExtractor(max_buttons=max_buttons, include_submit=include_submit)
    return extractor.extract(tree, container)
