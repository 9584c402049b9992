"""
Cuisinons - Extraction Orchestrator.

Runs the extraction tiers in priority order and stops at the first success
that clears the confidence threshold:

1. Skip tiers that cannot handle the input (recorded as a warning)
2. Return a confident success immediately, earlier warnings first
3. Otherwise collect the tier's warnings and move on
4. When every tier is spent, ask for a manual import

Results from different tiers are never merged. Tiers run strictly one after
another; each is more expensive than the last.
"""

import logging
from collections.abc import Iterable

from cuisinons.recipe_import.extractors.base import RecipeExtractor
from cuisinons.recipe_import.models import (
    ExtractorInput,
    ExtractorOptions,
    ExtractorResult,
    ImportResult,
    ImportStatus,
)
from cuisinons.recipe_import.scoring import CONFIDENCE_THRESHOLD

logger = logging.getLogger(__name__)

EXHAUSTED_WARNING = "All automatic extraction methods failed. Please try manual import."


class ExtractionOrchestrator:
    """Drives the extractor cascade for one input at a time."""

    def __init__(
        self,
        extractors: Iterable[RecipeExtractor],
        threshold: int = CONFIDENCE_THRESHOLD,
    ) -> None:
        self.extractors: tuple[RecipeExtractor, ...] = tuple(
            sorted(extractors, key=lambda extractor: extractor.priority)
        )
        self.threshold = threshold

    def text_only(self) -> "ExtractionOrchestrator":
        """Orchestrator restricted to tiers that work on plain text."""
        return ExtractionOrchestrator(
            [e for e in self.extractors if getattr(e, "accepts_text", False)],
            threshold=self.threshold,
        )

    async def run(
        self,
        url: str,
        html: str | None = None,
        content: str | None = None,
        options: ExtractorOptions | None = None,
    ) -> ImportResult:
        """
        Run the cascade.

        Returns:
            `success` with the winning tier's recipe, or `manual_required`
            with every warning collected along the way
        """
        input = ExtractorInput(
            url=url,
            html=html,
            content=content,
            options=options or ExtractorOptions(),
        )
        warnings: list[str] = []
        best: ExtractorResult | None = None

        for extractor in self.extractors:
            if not extractor.can_handle(input):
                warnings.append(f"{extractor.name} extractor cannot handle this input")
                continue

            logger.info(f"Trying {extractor.name} extractor for {url}")
            try:
                result = await extractor.extract(input)
            except Exception as e:
                logger.warning(f"{extractor.name} extractor raised for {url}: {e}")
                warnings.append(f"{extractor.name} extraction failed: {e}")
                continue

            if result.succeeded and result.confidence >= self.threshold:
                logger.info(
                    f"{extractor.name} extractor succeeded for {url} "
                    f"(confidence {result.confidence})"
                )
                return ImportResult(
                    status=ImportStatus.SUCCESS,
                    recipe=result.recipe,
                    extraction_method=result.extraction_method or getattr(extractor, "method", None),
                    confidence=result.confidence,
                    warnings=warnings + result.warnings,
                    missing_fields=result.missing_fields,
                    source_url=url,
                )

            if result.succeeded:
                logger.info(
                    f"{extractor.name} extractor below threshold for {url} "
                    f"({result.confidence} < {self.threshold})"
                )
                if result.extraction_method is None:
                    result.extraction_method = getattr(extractor, "method", None)
                if best is None or result.confidence > best.confidence:
                    best = result

            warnings.extend(result.warnings)

        logger.info(f"All extractors exhausted for {url}")
        warnings.append(EXHAUSTED_WARNING)

        # Keep the best low-confidence recipe so the manual form can be pre-filled
        if best is not None:
            return ImportResult(
                status=ImportStatus.MANUAL_REQUIRED,
                recipe=best.recipe,
                extraction_method=best.extraction_method,
                confidence=best.confidence,
                warnings=warnings,
                missing_fields=best.missing_fields,
                source_url=url,
            )

        return ImportResult(
            status=ImportStatus.MANUAL_REQUIRED,
            warnings=warnings,
            source_url=url,
        )
