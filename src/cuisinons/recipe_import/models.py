"""Data models for recipe import."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class ExtractionMethod(str, Enum):
    """Method used to extract recipe data."""

    SCHEMA_ORG = "schema_org"
    HTML_SCRAPING = "html_scraping"
    LLM = "llm"
    MANUAL = "manual"


class ExtractionStatus(str, Enum):
    """Outcome of a single extractor attempt."""

    SUCCESS = "success"
    FAILED = "failed"


class ImportStatus(str, Enum):
    """Terminal outcome of an import call."""

    SUCCESS = "success"
    PARTIAL = "partial"  # Reserved for extractors returning usable-but-incomplete data
    MANUAL_REQUIRED = "manual_required"
    FAILED = "failed"


@dataclass
class ExtractorOptions:
    """Tuning values for AI-backed extractors. None means extractor default."""

    max_tokens: int | None = None
    temperature: float | None = None
    timeout: float | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExtractorInput:
    """
    Input shared by every extractor in one import call.

    URL import supplies `html`; text import supplies `content`.
    """

    url: str
    html: str | None = None
    content: str | None = None
    options: ExtractorOptions = field(default_factory=ExtractorOptions)


@dataclass
class RecipeIngredient:
    """An ingredient association resolved against the ingredient table."""

    ingredient_id: str
    name: str
    quantity: float
    unit: str
    raw_text: str | None = None


@dataclass
class PartialRecipe:
    """Normalized recipe produced by any extractor. Times are in minutes."""

    name: str | None = None
    description: str | None = None
    image: str | None = None
    preparation_time: int | None = None
    cooking_time: int | None = None
    total_time: int | None = None
    servings: int | None = None

    # Nutrition (grams, except calories)
    calories: int | None = None
    fat: float | None = None
    protein: float | None = None
    carbohydrates: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None

    recipe_category: str | None = None
    recipe_cuisine: str | None = None
    difficulty: str | None = None
    skill_level: str | None = None
    keywords: list[str] = field(default_factory=list)
    suitable_for_diet: list[str] = field(default_factory=list)
    recipe_equipment: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    estimated_cost: float | None = None

    ingredients_raw: list[str] = field(default_factory=list)
    recipe_ingredients: list[RecipeIngredient] = field(default_factory=list)
    is_private: bool = True
    source_url: str | None = None

    def is_complete(self) -> bool:
        """A recipe can be saved once it has a name and at least one step."""
        if not self.name or not self.name.strip():
            return False
        return any(step.strip() for step in self.instructions)


@dataclass
class ExtractorResult:
    """Result of one extractor attempt."""

    status: ExtractionStatus
    recipe: PartialRecipe | None = None
    confidence: int = 0  # 0 to 100
    warnings: list[str] = field(default_factory=list)
    missing_fields: list[str] | None = None
    extraction_method: ExtractionMethod | None = None

    def __post_init__(self) -> None:
        if self.status == ExtractionStatus.SUCCESS and self.recipe is None:
            raise ValueError("A successful extraction must carry a recipe")

    @property
    def succeeded(self) -> bool:
        return self.status == ExtractionStatus.SUCCESS

    @classmethod
    def failed(
        cls, *warnings: str, method: ExtractionMethod | None = None
    ) -> "ExtractorResult":
        return cls(
            status=ExtractionStatus.FAILED,
            warnings=list(warnings),
            extraction_method=method,
        )


@dataclass
class ImportResult:
    """Terminal outcome of the orchestrator and the import service."""

    status: ImportStatus
    recipe: PartialRecipe | None = None
    extraction_method: ExtractionMethod | None = None
    confidence: int | None = None
    warnings: list[str] = field(default_factory=list)
    missing_fields: list[str] | None = None
    recipe_id: str | None = None
    source_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready shape for callers (enums as their string values)."""
        return {
            "status": self.status.value,
            "recipe": asdict(self.recipe) if self.recipe else None,
            "extraction_method": self.extraction_method.value if self.extraction_method else None,
            "confidence": self.confidence,
            "warnings": list(self.warnings),
            "missing_fields": self.missing_fields,
            "recipe_id": self.recipe_id,
            "source_url": self.source_url,
        }
