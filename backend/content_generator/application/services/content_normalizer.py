"""Content normalization — turns raw LLM completion text into a title/description pair.

Models rarely follow the requested format exactly, so extraction is an ordered
chain of independent stages, each a pure function that returns a candidate
pair or ``None``:

  1. Labeled lines      ``Title: ...`` / ``Description: ...``
  2. Positional         first two non-empty lines, stray labels stripped
  3. Reasoning channel  loosened labels, searched in reasoning/refusal text

The first stage whose sanitized title AND description are both non-empty wins.
If none does, ``ParseError`` is raised with the raw text attached. The chain
never invents placeholder content; substituting a fallback article is a
caller decision.
"""

import logging
import re
from collections.abc import Callable

from content_generator.domain.entities import GeneratedContent
from content_generator.domain.exceptions import EmptyContentError, ParseError

logger = logging.getLogger(__name__)

# Captures stop at end-of-line: ``.`` never matches a newline.
_LABELED_TITLE = re.compile(r"Title:[ \t]*(.+)", re.IGNORECASE)
_LABELED_DESCRIPTION = re.compile(r"Description:[ \t]*(.+)", re.IGNORECASE)

_LOOSE_TITLE = re.compile(r"title[^:\n]*:[ \t]*(.+)", re.IGNORECASE)
_LOOSE_DESCRIPTION = re.compile(r"description[^:\n]*:[ \t]*(.+)", re.IGNORECASE)

_TITLE_PREFIX = re.compile(r"^Title:\s*", re.IGNORECASE)
_DESCRIPTION_PREFIX = re.compile(r"^Description:\s*", re.IGNORECASE)

_FENCE_LINE = re.compile(r"^```[ \t]*[\w+-]*$")
_LEADING_FENCE = re.compile(r"^```(?:[ \t]*[\w+-]+(?=\s|$))?\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")
_HEADING = re.compile(r"^#{1,6}(?:\s+|$)", re.MULTILINE)
_EMPHASIS = re.compile(r"[*`]")

_QUOTES = "\"'“”‘’"

Candidate = tuple[str, str]
Stage = Callable[[str, str | None], Candidate | None]


# ── Sanitization ─────────────────────────────────────────────────────

def _sanitize_once(value: str) -> str:
    text = value.strip()
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    text = text.strip()
    if len(text) >= 2 and text[0] in _QUOTES and text[-1] in _QUOTES:
        text = text[1:-1]
    text = text.replace("\\n", " ")
    text = _EMPHASIS.sub("", text)
    text = _HEADING.sub("", text.strip())
    return text.strip()


def sanitize(value: str) -> str:
    """Strip fences, wrapping quotes, literal ``\\n`` escapes and markdown markers.

    Rules are re-applied until the text stops changing, which makes the
    function idempotent (``sanitize(sanitize(x)) == sanitize(x)``). Every rule
    only removes characters, so the loop always terminates.
    """
    current = value
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


# ── Extraction stages ────────────────────────────────────────────────

def extract_labeled(content: str, alternate: str | None = None) -> Candidate | None:
    """Stage 1: explicit ``Title:`` and ``Description:`` labels."""
    title = _LABELED_TITLE.search(content)
    description = _LABELED_DESCRIPTION.search(content)
    if not title or not description:
        return None
    return title.group(1).strip(), description.group(1).strip()


def extract_positional(content: str, alternate: str | None = None) -> Candidate | None:
    """Stage 2: first line is the title, second line the description."""
    lines = [
        line.strip()
        for line in content.splitlines()
        if line.strip() and not _FENCE_LINE.match(line.strip())
    ]
    if len(lines) < 2:
        return None
    title = _TITLE_PREFIX.sub("", lines[0]).strip()
    description = _DESCRIPTION_PREFIX.sub("", lines[1]).strip()
    return title, description


def extract_from_reasoning(content: str, alternate: str | None = None) -> Candidate | None:
    """Stage 3: loosened labels, searched in the reasoning/refusal channel."""
    if not alternate:
        return None
    title = _LOOSE_TITLE.search(alternate)
    description = _LOOSE_DESCRIPTION.search(alternate)
    if not title or not description:
        return None
    return title.group(1).strip(), description.group(1).strip()


EXTRACTION_STAGES: tuple[Stage, ...] = (
    extract_labeled,
    extract_positional,
    extract_from_reasoning,
)


def normalize_completion(content: str | None, alternate: str | None = None) -> GeneratedContent:
    """Run the extraction chain over one completion.

    Args:
        content: The main message content returned by the model.
        alternate: Reasoning or refusal text, when the provider exposes it
            separately from the content.

    Returns:
        The sanitized title/description pair.

    Raises:
        EmptyContentError: ``content`` is missing or blank.
        ParseError: No stage produced both fields.
    """
    if not content or not content.strip():
        logger.error("No content in completion (alternate text present: %s)", bool(alternate))
        raise EmptyContentError(
            "No content received from API",
            details=alternate or "The model returned an empty message",
        )

    for stage in EXTRACTION_STAGES:
        candidate = stage(content, alternate)
        if candidate is None:
            continue
        title, description = (sanitize(part) for part in candidate)
        if title and description:
            logger.debug("Extracted article via %s", stage.__name__)
            return GeneratedContent(title=title, description=description)
        logger.debug("%s produced an empty field after sanitization", stage.__name__)

    logger.error("Could not parse content format: %r", content)
    raise ParseError(raw_text=content)
