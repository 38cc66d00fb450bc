"""Content dimension extraction.

Resolves a map of named, independently configured dimensions (brand,
location, service...) with one strategy each. A failing dimension records its
error kind and the rest carry on.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from heroscan.dimensions.models import (
    DimensionConfig,
    DimensionErrorKind,
    DimensionReport,
    DimensionResult,
)
from heroscan.dimensions.strategies import STRATEGIES, DimensionContext, Strategy
from heroscan.extraction.markup import MarkupTree
from heroscan.extraction.metadata import HeadMetadata, extract_head_metadata

logger = structlog.get_logger(__name__)

RawConfig = DimensionConfig | Mapping[str, Any] | None


class DimensionExtractor:
    """Dispatches each dimension config to its strategy."""

    def __init__(self, strategies: Mapping[str, Strategy] | None = None):
        self.strategies = dict(strategies or STRATEGIES)

    def extract(
        self,
        dimensions: Mapping[str, RawConfig] | None,
        tree: MarkupTree | None = None,
        path: str = "",
        head: HeadMetadata | Mapping[str, Any] | None = None,
    ) -> DimensionReport:
        """
        Resolve every enabled, non-empty dimension.

        Args:
            dimensions: Dimension name -> config (model or plain mapping)
            tree: Parsed document for ``content_selector``
            path: Page path or URL for ``url_pattern`` and ``{absoluteurl}``
            head: Head metadata for ``metadata``; read from ``tree`` when
                omitted

        Returns:
            DimensionReport. Empty and disabled configs are left out of the
            report and its counts.
        """
        report = DimensionReport()
        if not dimensions:
            logger.debug("dimension_extraction_skipped", reason="no_dimensions")
            return report

        context = DimensionContext(tree=tree, path=path or "", head=self._resolve_head(head, tree))

        for name, raw in dimensions.items():
            config = self._parse_config(name, raw)
            if config is None:
                continue
            if isinstance(config, DimensionResult):
                report.results[name] = config
                continue

            report.results[name] = self._run(name, config, context)

        logger.info(
            "dimension_extraction_complete",
            success_count=report.success_count,
            total_count=report.total_count,
        )
        return report

    def _resolve_head(
        self, head: HeadMetadata | Mapping[str, Any] | None, tree: MarkupTree | None
    ) -> HeadMetadata:
        if isinstance(head, HeadMetadata):
            return head
        if head is not None:
            return HeadMetadata.from_dict(dict(head))
        if tree is not None:
            return extract_head_metadata(tree)
        return HeadMetadata()

    def _parse_config(self, name: str, raw: RawConfig) -> DimensionConfig | DimensionResult | None:
        """Validated config, a MissingConfig result, or None to skip."""
        if isinstance(raw, DimensionConfig):
            config = raw
        else:
            if not raw:
                logger.debug("dimension_skipped", dimension=name, reason="empty")
                return None
            try:
                config = DimensionConfig.model_validate(raw)
            except ValidationError as e:
                if isinstance(raw, Mapping) and raw.get("enabled") is False:
                    logger.debug("dimension_skipped", dimension=name, reason="disabled")
                    return None
                logger.warning(
                    "dimension_config_invalid", dimension=name, errors=e.error_count()
                )
                return DimensionResult.failed(DimensionErrorKind.MISSING_CONFIG)

        if not config.enabled:
            logger.debug("dimension_skipped", dimension=name, reason="disabled")
            return None
        return config

    def _run(self, name: str, config: DimensionConfig, context: DimensionContext) -> DimensionResult:
        strategy = self.strategies.get(config.extraction_method or "")
        if strategy is None:
            result = DimensionResult.failed(DimensionErrorKind.UNKNOWN_METHOD)
        else:
            result = strategy(config, context)

        if result.success:
            logger.debug(
                "dimension_extracted",
                dimension=name,
                method=config.extraction_method,
                value=result.value,
            )
        else:
            logger.info(
                "dimension_failed",
                dimension=name,
                method=config.extraction_method,
                error=result.error.value if result.error else None,
            )
        return result


def extract_dimensions(
    dimensions: Mapping[str, RawConfig] | None,
    tree: MarkupTree | None = None,
    path: str = "",
    head: HeadMetadata | Mapping[str, Any] | None = None,
) -> DimensionReport:
    """Convenience function to resolve content dimensions."""
    return DimensionExtractor().extract(dimensions, tree=tree, path=path, head=head)
