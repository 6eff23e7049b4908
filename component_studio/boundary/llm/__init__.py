"""
Generation service boundary.

Exports:
  - GeminiGenerationClient: prompt in, generated text out
"""

from component_studio.boundary.llm.gemini_client import GeminiGenerationClient

__all__ = ["GeminiGenerationClient"]
