"""Hero extraction pipeline.

Primary heading -> container search -> element extractors -> scoring, folded
into one result value. Every call builds fresh objects and never touches the
input tree, so the same tree and options always give the same output.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from heroscan.exceptions import ErrorKind, ParserUnavailableError
from heroscan.extraction.blocks import ButtonBlock, HeadingBlock, ImageBlock, LinkBlock, ParagraphBlock
from heroscan.extraction.buttons import ButtonExtractor
from heroscan.extraction.container import (
    CandidateContainer,
    ContainerLocator,
    ContainerMethod,
    StructuralIndex,
)
from heroscan.extraction.headings import HeadingExtractor, locate_primary_heading
from heroscan.extraction.images import ImageExtractor
from heroscan.extraction.links import LinkExtractor
from heroscan.extraction.markup import MarkupNode, MarkupTree, parse_html
from heroscan.extraction.options import HeroExtractionOptions
from heroscan.extraction.paragraphs import ParagraphExtractor
from heroscan.scoring.validator import (
    ValidationResult,
    validate_button,
    validate_content,
    validate_extraction,
    validate_heading,
    validate_image,
)

logger = structlog.get_logger(__name__)

Parser = Callable[[str], MarkupTree]

PARSER_UNAVAILABLE_MESSAGE = "No HTML parser supplied; cannot build a markup tree"


@dataclass(frozen=True)
class ContainerDescriptor:
    """Where the hero content was taken from."""

    tag: str
    classes: str
    id: str
    method: str
    keyword: str | None = None

    @property
    def identified(self) -> bool:
        """Container named as a hero by its own markup."""
        return self.method == ContainerMethod.SEMANTIC

    @classmethod
    def from_candidate(cls, candidate: CandidateContainer) -> "ContainerDescriptor":
        return cls(
            tag=candidate.node.tag,
            classes=candidate.node.class_string,
            id=candidate.node.element_id,
            method=candidate.method.value,
            keyword=candidate.matched_keyword,
        )

    def to_dict(self) -> dict:
        return {
            "tag": self.tag,
            "classes": self.classes,
            "id": self.id,
            "method": self.method,
            "keyword": self.keyword,
        }


@dataclass
class ExtractedContent:
    """Typed blocks pulled from the hero container."""

    h1: str
    container: ContainerDescriptor
    h2: list[HeadingBlock] = field(default_factory=list)
    h3: list[HeadingBlock] = field(default_factory=list)
    buttons: list[ButtonBlock] = field(default_factory=list)
    content: list[ParagraphBlock] = field(default_factory=list)
    images: list[ImageBlock] = field(default_factory=list)
    links: list[LinkBlock] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "h1": self.h1,
            "h2": [h.text for h in self.h2],
            "h3": [h.text for h in self.h3],
            "buttons": [b.to_dict() for b in self.buttons],
            "content": [p.text for p in self.content],
            "images": [i.to_dict() for i in self.images],
            "links": [link.to_dict() for link in self.links],
            "container": self.container.to_dict(),
        }


@dataclass
class HeroExtractionResult:
    """Outcome of one hero extraction."""

    success: bool
    extracted: ExtractedContent | None = None
    validation: ValidationResult | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None

    # Tree references for callers that keep the tree around; not serialized
    heading: MarkupNode | None = field(default=None, repr=False, compare=False)
    container: CandidateContainer | None = field(default=None, repr=False, compare=False)

    @property
    def is_valid(self) -> bool:
        return self.validation is not None and self.validation.is_valid

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "HeroExtractionResult":
        return cls(success=False, error_kind=kind, error=message)

    def to_dict(self) -> dict:
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "errorKind": self.error_kind.value if self.error_kind else None,
                "extracted": None,
            }
        return {
            "success": True,
            "extracted": self.extracted.to_dict() if self.extracted else None,
            "validation": self.validation.to_dict() if self.validation else None,
            "isValid": self.is_valid,
        }


class HeroExtractor:
    """Runs the hero extraction pipeline over markup trees."""

    def __init__(
        self,
        parser: Parser | None = parse_html,
        options: HeroExtractionOptions | None = None,
    ):
        self.parser = parser
        self.options = options or HeroExtractionOptions()

    def require_parser(self) -> Parser:
        """Return the parser or raise ParserUnavailableError."""
        if self.parser is None:
            raise ParserUnavailableError(PARSER_UNAVAILABLE_MESSAGE)
        return self.parser

    def extract_html(
        self, html: str, options: HeroExtractionOptions | None = None
    ) -> HeroExtractionResult:
        """
        Parse ``html`` with the injected parser, then extract.

        Without a parser this returns a ParserUnavailable failure straight
        away.
        """
        if self.parser is None:
            logger.warning("hero_extraction_parser_unavailable")
            return HeroExtractionResult.failure(
                ErrorKind.PARSER_UNAVAILABLE, PARSER_UNAVAILABLE_MESSAGE
            )
        return self.extract(self.parser(html), options)

    def extract(
        self, tree: MarkupTree, options: HeroExtractionOptions | None = None
    ) -> HeroExtractionResult:
        """
        Extract hero content from a parsed tree.

        Args:
            tree: Parsed markup tree (not modified)
            options: Overrides the extractor's default options

        Returns:
            HeroExtractionResult. A document with no visible primary heading
            gives ``success=False`` with NoHeadingFound.
        """
        options = options or self.options

        lookup = locate_primary_heading(
            tree,
            level=options.preferred_heading_level,
            hiding_classes=options.hiding_classes,
            include_subtext=options.include_subtext,
        )
        if not lookup.found:
            logger.info("hero_extraction_no_heading", level=options.preferred_heading_level)
            return HeroExtractionResult.failure(
                ErrorKind.NO_HEADING_FOUND,
                f"No visible {options.preferred_heading_level} element found",
            )

        index = StructuralIndex(tree)
        candidate = ContainerLocator(max_depth=options.max_depth).locate(tree, lookup.node, index)
        extracted = self._extract_blocks(tree, candidate, lookup.text, options)
        validation = validate_extraction(extracted)

        logger.info(
            "hero_extraction_complete",
            container_method=candidate.method.value,
            container_depth=candidate.depth,
            buttons=len(extracted.buttons),
            content=len(extracted.content),
            images=len(extracted.images),
            score=validation.total,
            quality=validation.quality.value,
        )
        return HeroExtractionResult(
            success=True,
            extracted=extracted,
            validation=validation,
            heading=lookup.node,
            container=candidate,
        )

    def _extract_blocks(
        self,
        tree: MarkupTree,
        candidate: CandidateContainer,
        heading_text: str,
        options: HeroExtractionOptions,
    ) -> ExtractedContent:
        node = candidate.node
        prefilter = options.prefilter_items

        headings = HeadingExtractor(
            max_headings=options.max_headings,
            min_length=options.min_heading_length,
            include_subtext=options.include_subtext,
            hiding_classes=options.hiding_classes,
            item_filter=validate_heading if prefilter else None,
        )
        buttons = ButtonExtractor(
            max_buttons=options.max_buttons,
            include_submit=options.include_submit,
            item_filter=validate_button if prefilter else None,
        )
        paragraphs = ParagraphExtractor(
            min_length=options.min_content_length,
            max_length=options.max_content_length,
            max_blocks=options.max_content_blocks,
            item_filter=validate_content if prefilter else None,
        )
        images = ImageExtractor(
            max_images=options.max_images,
            min_width=options.min_width,
            min_height=options.min_height,
            exclude_icons=options.exclude_icons,
            exclude_logos=options.exclude_logos,
            item_filter=validate_image if prefilter else None,
        )

        return ExtractedContent(
            h1=heading_text,
            container=ContainerDescriptor.from_candidate(candidate),
            h2=headings.extract(tree, node, "h2"),
            h3=headings.extract(tree, node, "h3"),
            buttons=buttons.extract(tree, node),
            content=paragraphs.extract(tree, node),
            images=images.extract(tree, node),
            links=(
                LinkExtractor(max_links=options.max_links).extract(tree, node)
                if options.include_links
                else []
            ),
        )


def extract_hero(
    html: str,
    options: HeroExtractionOptions | None = None,
    parser: Parser | None = parse_html,
) -> HeroExtractionResult:
    """
    Convenience function to extract hero content from HTML.

    Args:
        html: Raw HTML
        options: Extraction options (defaults to the standard preset)
        parser: Markup parser; None yields a ParserUnavailable failure

    Returns:
        HeroExtractionResult
    """
    return HeroExtractor(parser=parser, options=options).extract_html(html)
