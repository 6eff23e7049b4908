"""
Component generation pipeline: prompt assembly and artifact extraction.

Exports:
  - PromptBuilder, PromptIntent, classify_intent, build_override_request
  - ArtifactExtractor, FencedBlockExtractor, normalize_markup, normalize_style
"""

from component_studio.core.codegen.extractor import (
    ArtifactExtractor,
    FencedBlockExtractor,
    normalize_markup,
    normalize_style,
)
from component_studio.core.codegen.prompt_builder import (
    CONTEXT_WINDOW,
    PromptBuilder,
    PromptIntent,
    build_override_request,
    classify_intent,
    is_duplicate_request,
)

__all__ = [
    "ArtifactExtractor",
    "CONTEXT_WINDOW",
    "FencedBlockExtractor",
    "PromptBuilder",
    "PromptIntent",
    "build_override_request",
    "classify_intent",
    "is_duplicate_request",
    "normalize_markup",
    "normalize_style",
]
