"""Typed errors raised inside the import pipeline.

Extractors and the fetcher raise these; the extractor base class and the
import service turn them into warnings, so none of them escape the public
entry points.
"""

from enum import Enum


class ImportErrorType(str, Enum):
    VALIDATION_FAILED = "validation_failed"
    EXTRACTION_ERROR = "extraction_error"
    PARSING_ERROR = "parsing_error"
    NO_RECIPE_FOUND = "no_recipe_found"
    NETWORK_ERROR = "network_error"
    TIMEOUT_ERROR = "timeout_error"


class RecipeImportError(Exception):
    """Base error for recipe import failures."""

    def __init__(self, message: str, error_type: ImportErrorType) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def __str__(self) -> str:
        return self.message


class FetchError(RecipeImportError):
    """The webpage could not be fetched."""

    def __init__(
        self,
        message: str,
        error_type: ImportErrorType = ImportErrorType.NETWORK_ERROR,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, error_type)
        self.status_code = status_code


class WebsiteBlockedError(FetchError):
    """The site refused automated access (HTTP 403 or 429)."""

    def __init__(self, status_code: int | None = None) -> None:
        super().__init__("Website blocks automated access", status_code=status_code)


class ContentTooLargeError(FetchError):
    """The page exceeds the configured size cap."""

    def __init__(self) -> None:
        super().__init__("Content too large to process", ImportErrorType.VALIDATION_FAILED)
