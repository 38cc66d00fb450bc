"""Hero image extraction.

Separates lead imagery from the icons and logos that usually share the hero
area, and infers one background image from the container's inline style.
Nothing is rendered, so sizes are known only when the markup states them.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import structlog

from heroscan.extraction.blocks import ImageBlock
from heroscan.extraction.markup import MarkupNode, MarkupTree

logger = structlog.get_logger(__name__)

ICON_INDICATORS = ("icon", "ico", "glyph", "symbol", "fa-", "fi-", "material-")
LOGO_INDICATORS = ("logo", "brand", "wordmark")
HERO_INDICATORS = ("hero", "banner", "feature", "splash", "background", "cover", "main")

ICON_MAX_SIZE = 64
SVG_ICON_MAX_WIDTH = 100

ICON_PATH_PATTERN = re.compile(r"/(icons?|sprites?)/", re.IGNORECASE)
SVG_PATTERN = re.compile(r"\.svg$", re.IGNORECASE)
DIMENSION_PATTERN = re.compile(r"^\s*(\d+)(?:\.\d+)?\s*(?:px)?\s*$", re.IGNORECASE)
BACKGROUND_URL_PATTERN = re.compile(
    r"background(?:-image)?\s*:[^;]*?url\(\s*['\"]?([^'\")]+?)['\"]?\s*\)",
    re.IGNORECASE,
)


def parse_dimension(value: str) -> int | None:
    """Pixel size from a width/height attribute; None when unknown or relative."""
    match = DIMENSION_PATTERN.match(value or "")
    return int(match.group(1)) if match else None


def image_source(node: MarkupNode) -> str:
    # Lazy-loaded images keep the real URL in data-src
    return (node.get("src") or node.get("data-src")).strip()


def _identity_string(node: MarkupNode, src: str) -> str:
    return " ".join([src, node.get("alt"), node.class_string, node.element_id]).lower()


def is_likely_icon(node: MarkupNode) -> bool:
    """Icon by keyword, by small stated size, by path, or a small SVG."""
    src = image_source(node)
    if any(ind in _identity_string(node, src) for ind in ICON_INDICATORS):
        return True

    width = parse_dimension(node.get("width"))
    height = parse_dimension(node.get("height"))
    if width is not None and width < ICON_MAX_SIZE:
        return True
    if height is not None and height < ICON_MAX_SIZE:
        return True

    if ICON_PATH_PATTERN.search(src):
        return True
    path = src.split("?", 1)[0].split("#", 1)[0]
    return bool(SVG_PATTERN.search(path)) and (width is None or width < SVG_ICON_MAX_WIDTH)


def is_likely_logo(node: MarkupNode) -> bool:
    return any(ind in _identity_string(node, image_source(node)) for ind in LOGO_INDICATORS)


def is_likely_hero_image(node: MarkupNode, parent: MarkupNode | None) -> bool:
    """Hero keyword on the image's own or its parent's class/id."""
    parts = [node.class_string, node.element_id]
    if parent is not None:
        parts.extend([parent.class_string, parent.element_id])
    check = " ".join(parts).lower()
    return any(ind in check for ind in HERO_INDICATORS)


def background_image_url(node: MarkupNode) -> str | None:
    match = BACKGROUND_URL_PATTERN.search(node.style)
    if not match:
        return None
    url = match.group(1).strip()
    return url or None


class ImageExtractor:
    """Extracts hero-relevant images from a container."""

    def __init__(
        self,
        max_images: int = 3,
        min_width: int = 200,
        min_height: int = 150,
        exclude_icons: bool = True,
        exclude_logos: bool = True,
        item_filter: Callable[[ImageBlock], bool] | None = None,
    ):
        self.max_images = max_images
        self.min_width = min_width
        self.min_height = min_height
        self.exclude_icons = exclude_icons
        self.exclude_logos = exclude_logos
        self.item_filter = item_filter

    def extract(self, tree: MarkupTree, container: MarkupNode) -> list[ImageBlock]:
        """
        Extract images inside ``container`` in document order.

        A background image declared inline on the container is appended when
        the cap has room for it.
        """
        images: list[ImageBlock] = []
        skipped = 0

        for node in tree.find_all(container, ["img"]):
            if len(images) >= self.max_images:
                break
            image = self._build_image(tree, node)
            if image is None or (self.item_filter is not None and not self.item_filter(image)):
                skipped += 1
                continue
            images.append(image)

        if len(images) < self.max_images:
            background = self._background_image(container)
            if background is not None and (
                self.item_filter is None or self.item_filter(background)
            ):
                images.append(background)

        logger.debug("images_extracted", kept=len(images), skipped=skipped)
        return images

    def _meets_minimum_size(self, width: int | None, height: int | None) -> bool:
        # Unknown dimensions pass; the consumer can check the real file
        if width is None or height is None:
            return True
        return width >= self.min_width and height >= self.min_height

    def _build_image(self, tree: MarkupTree, node: MarkupNode) -> ImageBlock | None:
        src = image_source(node)
        if not src:
            return None
        if self.exclude_icons and is_likely_icon(node):
            return None
        if self.exclude_logos and is_likely_logo(node):
            return None

        width = parse_dimension(node.get("width"))
        height = parse_dimension(node.get("height"))
        if not self._meets_minimum_size(width, height):
            return None

        return ImageBlock(
            src=src,
            alt=node.get("alt"),
            width=width,
            height=height,
            is_hero=is_likely_hero_image(node, tree.parent(node)),
            title=node.get("title"),
            classes=node.class_string,
            loading=node.get("loading") or "auto",
        )

    def _background_image(self, container: MarkupNode) -> ImageBlock | None:
        url = background_image_url(container)
        if url is None:
            return None
        return ImageBlock(
            src=url,
            alt="Background image",
            width=None,
            height=None,
            is_hero=True,
            is_background=True,
            classes=container.class_string,
            loading="eager",
        )


def extract_images(
    tree: MarkupTree,
    container: MarkupNode,
    max_images: int = 3,
    min_width: int = 200,
    min_height: int = 150,
    exclude_icons: bool = True,
    exclude_logos: bool = True,
) -> list[ImageBlock]:
    """Convenience function to extract hero images."""
    extractor = ImageExtractor(
        max_images=max_images,
        min_width=min_width,
        min_height=min_height,
        exclude_icons=exclude_icons,
        exclude_logos=exclude_logos,
    )
    return extractor.extract(tree, container)
