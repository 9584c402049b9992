"""
Cuisinons - Extractor contract.

Each extraction tier subclasses RecipeExtractor and implements `_extract`.
`extract` wraps it so a tier can raise freely: any exception becomes a
failed result and the cascade moves on to the next tier.
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from cuisinons.recipe_import.models import ExtractionMethod, ExtractorInput, ExtractorResult

logger = logging.getLogger(__name__)


class RecipeExtractor(ABC):
    """Base class for the extraction tiers. Instances hold no request state."""

    name: ClassVar[str]
    priority: ClassVar[int]  # Ascending: tried first
    method: ClassVar[ExtractionMethod]
    accepts_text: ClassVar[bool] = False  # True if the tier works on plain text

    @abstractmethod
    def can_handle(self, input: ExtractorInput) -> bool:
        """Cheap pre-filter. Never does I/O."""

    async def extract(self, input: ExtractorInput) -> ExtractorResult:
        """Run the tier. Never raises."""
        try:
            return await self._extract(input)
        except Exception as e:
            logger.warning(f"{self.name} extractor failed for {input.url}: {e}")
            return ExtractorResult.failed(
                f"{self.name} extraction failed: {e}", method=self.method
            )

    @abstractmethod
    async def _extract(self, input: ExtractorInput) -> ExtractorResult:
        """Tier-specific extraction. May raise."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, priority={self.priority})"
