"""LLM extraction - last resort for pages and pasted text without markup.

The page is reduced to plain text, sent with a JSON-only instruction prompt,
and the reply is parsed leniently (fenced block first, then the outermost
braces). Confidence is fixed: generated structure is not scored by field
completeness.
"""

import html
import json
import logging
import re
from typing import Any

from cuisinons.llm.client import TextGenerator, get_generator
from cuisinons.recipe_import.errors import ImportErrorType, RecipeImportError
from cuisinons.recipe_import.extractors.base import RecipeExtractor
from cuisinons.recipe_import.models import (
    ExtractionMethod,
    ExtractionStatus,
    ExtractorInput,
    ExtractorResult,
    PartialRecipe,
)
from cuisinons.recipe_import.normalizer import (
    extract_image_url,
    normalize_ingredients,
    parse_servings,
    parse_time_text,
)
from cuisinons.recipe_import.scoring import find_missing_fields

logger = logging.getLogger(__name__)

LLM_CONFIDENCE = 70
MAX_CONTENT_CHARS = 8000
DEFAULT_MAX_TOKENS = 1500
DEFAULT_TEMPERATURE = 0.7

SYSTEM_PROMPT = """You extract recipes from web pages and pasted text.

Return the recipe as a JSON object with this shape:

{
  "title": "Recipe title",
  "description": "Brief description (optional)",
  "prepTime": 30,
  "cookTime": 45,
  "totalTime": 75,
  "servings": 4,
  "ingredients": ["1 cup flour", "2 eggs", "1/2 cup milk"],
  "instructions": ["Mix dry ingredients", "Add wet ingredients", "Bake for 30 minutes"],
  "imageUrl": "https://example.com/image.jpg"
}

Rules:
1. Only include fields where you found clear information
2. Convert all time values to minutes (e.g., "1 hour 30 min" becomes 90)
3. List ingredients exactly as written, preserving measurements
4. Break instructions into clear, separate steps
5. If no clear recipe is found, return: {"error": "No recipe found"}
6. Do not guess or make up information
7. Return only valid JSON, no additional text"""

_DROP_BLOCKS = re.compile(
    r"<(script|style|nav|header|footer|aside)\b[^>]*>[\s\S]*?</\1\s*>", re.IGNORECASE
)
_COMMENTS = re.compile(r"<!--[\s\S]*?-->")
_LINE_BREAKS = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_TAGS = re.compile(r"</?(?:p|div|h[1-6]|li)\b[^>]*>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]+>")

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")
_BARE_JSON = re.compile(r"(\{[\s\S]*\})")


class LlmExtractor(RecipeExtractor):
    """Tier 3: text generation over cleaned page text or pasted content."""

    name = "llm"
    priority = 3
    method = ExtractionMethod.LLM
    accepts_text = True

    def __init__(self, generator: TextGenerator | None = None) -> None:
        self._generator = generator

    @property
    def generator(self) -> TextGenerator:
        return self._generator or get_generator()

    def can_handle(self, input: ExtractorInput) -> bool:
        return bool(input.html or input.content)

    async def _extract(self, input: ExtractorInput) -> ExtractorResult:
        content = input.content or (prepare_content_for_llm(input.html) if input.html else "")
        if not content.strip():
            return ExtractorResult.failed(
                "No content available for LLM extraction", method=self.method
            )

        options = input.options
        max_tokens = options.max_tokens if options.max_tokens is not None else DEFAULT_MAX_TOKENS
        temperature = options.temperature if options.temperature is not None else DEFAULT_TEMPERATURE

        reply = await self.generator.generate(
            SYSTEM_PROMPT,
            build_user_message(content, input.url),
            max_tokens=max_tokens,
            temperature=temperature,
            timeout=options.timeout,
        )

        try:
            data = parse_llm_response(reply)
            recipe = llm_data_to_recipe(data, input.url)
        except RecipeImportError as e:
            logger.info(f"LLM extraction rejected for {input.url}: {e}")
            return ExtractorResult.failed(str(e), method=self.method)

        return ExtractorResult(
            status=ExtractionStatus.SUCCESS,
            recipe=recipe,
            confidence=LLM_CONFIDENCE,
            missing_fields=find_missing_fields(recipe),
            extraction_method=self.method,
        )


def prepare_content_for_llm(page_html: str) -> str:
    """
    Reduce a page to dense plain text.

    Drops script/style/navigation chrome and comments, turns block tags into
    line breaks, decodes entities and collapses whitespace.
    """
    text = _DROP_BLOCKS.sub("", page_html)
    text = _COMMENTS.sub("", text)
    text = _LINE_BREAKS.sub("\n", text)
    text = _BLOCK_TAGS.sub("\n", text)
    text = _ANY_TAG.sub(" ", text)
    text = html.unescape(text).replace("\xa0", " ")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*\n", "\n", text)
    return text.strip()


def build_user_message(content: str, url: str | None = None) -> str:
    """User message with the source URL and content capped at MAX_CONTENT_CHARS."""
    parts = []
    if url:
        parts.append(f"Source URL: {url}\n")

    truncated = content[:MAX_CONTENT_CHARS]
    if len(content) > MAX_CONTENT_CHARS:
        truncated += " ..."
    parts.append(f"Content to analyze:\n{truncated}")

    return "\n".join(parts)


def parse_llm_response(response: str) -> dict[str, Any]:
    """
    Pull the JSON object out of a model reply.

    Raises:
        RecipeImportError: no JSON, invalid JSON, or an {"error": ...} reply
    """
    match = _FENCED_JSON.search(response) or _BARE_JSON.search(response)
    if not match:
        raise RecipeImportError(
            "Failed to parse LLM response: No JSON found in response",
            ImportErrorType.PARSING_ERROR,
        )

    try:
        data = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise RecipeImportError(
            f"Failed to parse LLM response: {e}", ImportErrorType.PARSING_ERROR
        ) from e

    if not isinstance(data, dict):
        raise RecipeImportError(
            "Failed to parse LLM response: expected a JSON object",
            ImportErrorType.PARSING_ERROR,
        )

    if data.get("error"):
        raise RecipeImportError(str(data["error"]), ImportErrorType.NO_RECIPE_FOUND)

    return data


def _minutes(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    if isinstance(value, str):
        return parse_time_text(value)
    return None


def llm_data_to_recipe(data: dict[str, Any], source_url: str | None = None) -> PartialRecipe:
    """
    Validate the model's JSON and convert it to a PartialRecipe.

    Raises:
        RecipeImportError: if title, ingredients or instructions are missing
    """
    if not data.get("title") or not data.get("ingredients") or not data.get("instructions"):
        raise RecipeImportError(
            "LLM extraction missing required fields", ImportErrorType.VALIDATION_FAILED
        )

    instructions = data["instructions"]
    if isinstance(instructions, str):
        instructions = [instructions]

    description = data.get("description")
    return PartialRecipe(
        name=str(data["title"]).strip(),
        description=str(description).strip() if description else None,
        image=extract_image_url(data.get("imageUrl")),
        preparation_time=_minutes(data.get("prepTime")),
        cooking_time=_minutes(data.get("cookTime")),
        total_time=_minutes(data.get("totalTime")),
        servings=parse_servings(data.get("servings")),
        instructions=[str(step).strip() for step in instructions if str(step).strip()],
        ingredients_raw=normalize_ingredients(data["ingredients"]),
        is_private=True,
        source_url=source_url,
    )
