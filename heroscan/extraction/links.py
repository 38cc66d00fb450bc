"""Auxiliary link extraction (anchors that are not CTA buttons)."""

import re

import structlog

from heroscan.extraction.blocks import LinkBlock
from heroscan.extraction.buttons import is_button_candidate
from heroscan.extraction.markup import MarkupNode, MarkupTree, normalize_space

logger = structlog.get_logger(__name__)

BUTTON_CLASS_PATTERN = re.compile(r"btn|button", re.IGNORECASE)

# href used when an anchor has none
DEFAULT_HREF = "#"


def is_button_anchor(node: MarkupNode) -> bool:
    """Anchor the button extractor would pick up, or one with a button-ish class."""
    if BUTTON_CLASS_PATTERN.search(node.class_string):
        return True
    return is_button_candidate(node)


class LinkExtractor:
    """Extracts text links from a container."""

    def __init__(self, max_links: int = 10):
        self.max_links = max_links

    def extract(self, tree: MarkupTree, container: MarkupNode) -> list[LinkBlock]:
        links: list[LinkBlock] = []
        for node in tree.find_all(container, ["a"]):
            if len(links) >= self.max_links:
                break
            if is_button_anchor(node):
                continue
            text = normalize_space(tree.text_content(node))
            if not text:
                continue
            links.append(
                LinkBlock(
                    text=text,
                    href=node.get("href").strip() or DEFAULT_HREF,
                    classes=node.class_string,
                )
            )

        logger.debug("links_extracted", kept=len(links))
        return links


def extract_links(tree: MarkupTree, container: MarkupNode, max_links: int = 10) -> list[LinkBlock]:
    """Convenience function to extract auxiliary links."""
    return LinkExtractor(max_links=max_links).extract(tree, container)
