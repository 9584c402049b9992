"""
Cuisinons - LLM Package.

Text generation for the LLM extraction tier, with optional prompt logging.
"""

from cuisinons.llm.client import OpenAITextGenerator, TextGenerator, get_generator
from cuisinons.llm.prompt_logger import enable_prompt_logging, log_prompt

__all__ = [
    "OpenAITextGenerator",
    "TextGenerator",
    "enable_prompt_logging",
    "get_generator",
    "log_prompt",
]
