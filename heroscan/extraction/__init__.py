"""Hero content extraction package."""

# Lazy imports - use explicit imports when needed:
# from heroscan.extraction.hero import HeroExtractor, HeroExtractionResult, extract_hero
# from heroscan.extraction.options import HeroExtractionOptions
# from heroscan.extraction.markup import MarkupTree, parse_html, build_tree
# from heroscan.extraction.container import ContainerLocator, locate_container
# from heroscan.extraction.metadata import HeadMetadata, extract_head_metadata

__all__ = [
    # Pipeline
    "HeroExtractor",
    "HeroExtractionResult",
    "ExtractedContent",
    "ContainerDescriptor",
    "extract_hero",
    # Options
    "HeroExtractionOptions",
    "PRESETS",
    # Markup
    "MarkupNode",
    "MarkupTree",
    "build_tree",
    "parse_html",
    # Container
    "ContainerLocator",
    "CandidateContainer",
    "StructuralIndex",
    "locate_container",
    # Element extractors
    "HeadingExtractor",
    "locate_primary_heading",
    "extract_headings",
    "find_primary_heading",
    "ButtonExtractor",
    "extract_buttons",
    "ImageExtractor",
    "extract_images",
    "ParagraphExtractor",
    "extract_paragraphs",
    "LinkExtractor",
    "extract_links",
    # Head metadata
    "HeadMetadata",
    "extract_head_metadata",
]
