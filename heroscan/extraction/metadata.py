"""Head metadata (title, description, social and canonical tags)."""

from dataclasses import asdict, dataclass

import structlog

from heroscan.extraction.markup import MarkupNode, MarkupTree, normalize_space

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class HeadMetadata:
    """Document head values; empty string when a tag is absent."""

    title: str = ""
    description: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    twitter_title: str = ""
    twitter_description: str = ""
    twitter_image: str = ""
    canonical: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "metaDescription": self.description,
            "ogTitle": self.og_title,
            "ogDescription": self.og_description,
            "ogImage": self.og_image,
            "twitterTitle": self.twitter_title,
            "twitterDescription": self.twitter_description,
            "twitterImage": self.twitter_image,
            "canonical": self.canonical,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HeadMetadata":
        """Accept either the snake_case field names or the ``to_dict`` keys."""
        camel = {
            "metaDescription": "description",
            "ogTitle": "og_title",
            "ogDescription": "og_description",
            "ogImage": "og_image",
            "twitterTitle": "twitter_title",
            "twitterDescription": "twitter_description",
            "twitterImage": "twitter_image",
        }
        fields = set(asdict(cls()))
        values = {}
        for key, value in data.items():
            name = camel.get(key, key)
            if name in fields and value is not None:
                values[name] = str(value)
        return cls(**values)


def _meta_content(metas: list[MarkupNode], key: str) -> str:
    # Sites mix name= and property= for both OpenGraph and Twitter tags
    for meta in metas:
        if meta.get("name").lower() == key or meta.get("property").lower() == key:
            return meta.get("content").strip()
    return ""


def _canonical_href(links: list[MarkupNode]) -> str:
    for link in links:
        if "canonical" in link.get("rel").lower().split():
            return link.get("href").strip()
    return ""


def extract_head_metadata(tree: MarkupTree) -> HeadMetadata:
    """Read head metadata from anywhere in the document."""
    title_node = tree.find(tree.root, ["title"])
    metas = tree.find_all(tree.root, ["meta"])
    links = tree.find_all(tree.root, ["link"])

    metadata = HeadMetadata(
        title=normalize_space(tree.text_content(title_node)) if title_node else "",
        description=_meta_content(metas, "description"),
        og_title=_meta_content(metas, "og:title"),
        og_description=_meta_content(metas, "og:description"),
        og_image=_meta_content(metas, "og:image"),
        twitter_title=_meta_content(metas, "twitter:title"),
        twitter_description=_meta_content(metas, "twitter:description"),
        twitter_image=_meta_content(metas, "twitter:image"),
        canonical=_canonical_href(links),
    )
    logger.debug("head_metadata_extracted", has_title=bool(metadata.title))
    return metadata
