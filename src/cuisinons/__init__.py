"""
Cuisinons - Recipe import pipeline.

Turns a recipe URL or pasted recipe text into a private, normalized recipe:
- Structured data (JSON-LD / Schema.org)
- HTML heuristics
- LLM extraction as the last resort
"""

__version__ = "1.0.0"
