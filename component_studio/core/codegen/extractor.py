"""
Artifact extraction from generated text.

Finds fenced code regions in free-form model output and turns them into
the session's markup/style pair. This is a text-scanning heuristic that
patches the usual deviations (stray import/export lines, trailing comma,
missing closing brace); it does not validate the resulting code.

Dependencies: re (stdlib), component_studio.models
System role: Response extraction for chat turns
"""

import re
from abc import ABC, abstractmethod

from component_studio.models.session import Artifact

# Non-overlapping fenced regions: ```tag\n ... ```
FENCED_BLOCK = re.compile(r"```[ \t]*([\w+#.-]*)[ \t]*\r?\n(.*?)```", re.DOTALL)

MARKUP_TAGS = frozenset({"", "jsx", "tsx", "js", "javascript"})
STYLE_TAGS = frozenset({"css"})

IMPORT_LINE = re.compile(r"^\s*import[\s'\"{*]")
EXPORT_STATEMENT_LINE = re.compile(
    r"^\s*export\s+(?:"
    r"default\s+[\w$.]+\s*;?"
    r"|\{[^}]*\}(?:\s*from\s*['\"][^'\"]*['\"])?\s*;?"
    r"|\*\s*(?:as\s+\w+\s+)?from\s*['\"][^'\"]*['\"]\s*;?"
    r")\s*$"
)
EXPORT_PREFIX = re.compile(
    r"^(\s*)export\s+(?:default\s+)?(?=(?:async\s+)?(?:function|class|const|let|var)\b)"
)


def find_fenced_blocks(text: str) -> list[tuple[str, str]]:
    """
    List fenced regions in order of appearance.

    Args:
        text: Raw generated text

    Returns:
        list[tuple[str, str]]: (lowercased language tag, inner text) pairs
    """
    return [(match.group(1).lower(), match.group(2)) for match in FENCED_BLOCK.finditer(text)]


def normalize_markup(markup: str) -> str:
    """
    Clean extracted JSX so it can run in a live sandbox.

    Drops import lines and bare export statements, unwraps exported
    declarations, strips trailing whitespace and one trailing comma, and
    closes the text with a brace if it does not already end with one.

    Args:
        markup: Inner text of the markup block

    Returns:
        str: Normalized markup
    """
    kept = []
    for line in markup.splitlines(keepends=True):
        if IMPORT_LINE.match(line) or EXPORT_STATEMENT_LINE.match(line):
            continue
        kept.append(EXPORT_PREFIX.sub(r"\1", line, count=1))

    text = "".join(kept).rstrip()
    if text.endswith(","):
        text = text[:-1].rstrip()
    if not text.endswith("}"):
        text = f"{text}\n}}"
    return text


def normalize_style(style: str) -> str:
    """Trim surrounding whitespace from extracted CSS."""
    return style.strip()


class ArtifactExtractor(ABC):
    """Interface for turning generated text into an artifact."""

    @abstractmethod
    def extract(self, text: str, current: Artifact) -> Artifact:
        """
        Derive the next artifact from generated text.

        Args:
            text: Raw generated text
            current: Artifact before this turn

        Returns:
            Artifact: New artifact; fields with no match keep their current value
        """


class FencedBlockExtractor(ArtifactExtractor):
    """Regex-based extractor over markdown code fences."""

    def extract(self, text: str, current: Artifact) -> Artifact:
        markup = None
        style = None
        for tag, body in find_fenced_blocks(text):
            if markup is None and tag in MARKUP_TAGS:
                markup = body
            elif style is None and tag in STYLE_TAGS:
                style = body
            if markup is not None and style is not None:
                break

        return Artifact(
            markup=normalize_markup(markup) if markup is not None else current.markup,
            style=normalize_style(style) if style is not None else current.style,
        )
