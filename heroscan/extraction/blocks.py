"""Typed content blocks produced by the element extractors."""

from dataclasses import dataclass
from enum import StrEnum


class BlockType(StrEnum):
    """Content block variants."""

    HEADING = "heading"
    BUTTON = "button"
    IMAGE = "image"
    PARAGRAPH = "paragraph"
    LINK = "link"


class ControlType(StrEnum):
    """What kind of control a CTA button is."""

    BUTTON = "button"
    SUBMIT = "submit"
    LINK_BUTTON = "link-button"
    CUSTOM = "custom"


@dataclass(frozen=True)
class HeadingBlock:
    """A heading of a given level (1-6)."""

    level: int
    text: str

    @property
    def block_type(self) -> BlockType:
        return BlockType.HEADING

    def to_dict(self) -> dict:
        return {"type": self.block_type.value, "level": self.level, "text": self.text}


@dataclass(frozen=True)
class ButtonBlock:
    """A call-to-action control."""

    text: str
    control_type: ControlType
    href: str | None
    classes: str
    priority: int
    onclick: str | None = None

    @property
    def block_type(self) -> BlockType:
        return BlockType.BUTTON

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "type": self.control_type.value,
            "href": self.href,
            "onclick": self.onclick,
            "classes": self.classes,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class ImageBlock:
    """An image or an inferred CSS background image."""

    src: str
    alt: str
    width: int | None
    height: int | None
    is_hero: bool
    is_background: bool = False
    title: str = ""
    classes: str = ""
    loading: str = "auto"

    @property
    def block_type(self) -> BlockType:
        return BlockType.IMAGE

    def to_dict(self) -> dict:
        return {
            "src": self.src,
            "alt": self.alt,
            "title": self.title,
            "width": self.width,
            "height": self.height,
            "classes": self.classes,
            "loading": self.loading,
            "isHero": self.is_hero,
            "isBackground": self.is_background,
        }


@dataclass(frozen=True)
class ParagraphBlock:
    """A run of descriptive body text."""

    text: str

    @property
    def block_type(self) -> BlockType:
        return BlockType.PARAGRAPH

    def to_dict(self) -> dict:
        return {"type": self.block_type.value, "text": self.text}


@dataclass(frozen=True)
class LinkBlock:
    """An auxiliary (non-button) link."""

    text: str
    href: str
    classes: str = ""

    @property
    def block_type(self) -> BlockType:
        return BlockType.LINK

    def to_dict(self) -> dict:
        return {"text": self.text, "href": self.href, "classes": self.classes}


ContentBlock = HeadingBlock | ButtonBlock | ImageBlock | ParagraphBlock | LinkBlock
