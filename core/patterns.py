"""
Lexical pattern extraction.

Every pass is a regular expression run over the raw text, so the
extractor works on any language and on truncated or broken snippets.
Nothing here parses code; nesting and recursion are textual
approximations.

Spans between anchors are either stopped at the next bracket or capped
at a fixed width, so every pass is linear in the length of the text.
"""

from __future__ import annotations

import logging
import re

from .models import FeatureVector

logger = logging.getLogger(__name__)


# Control keywords that look like ``name(...) {`` but are never callables.
_KEYWORDS = r"(?!(?:for|foreach|while|if|else|switch|catch|with|return|function|do)\b)"

LOOP = re.compile(
    r"\b(?:for|while|foreach|forEach)\b|\bfor\s*\(|while\s*\(|forEach\s*\(",
    re.IGNORECASE,
)

# A loop header followed by a second loop header before any brace closes.
NESTED_LOOP = re.compile(
    r"(?:for|while)\s*\([^()]*\)\s*\{[^{}]*(?:for|while)\s*\([^()]*\)",
    re.IGNORECASE,
)

# ``function|def|func|fn NAME`` or ``NAME(...) {``
FUNCTION_HEAD = re.compile(
    r"\b(?:function|def|func|fn)\s+(\w+)\b"
    r"|\b" + _KEYWORDS + r"(\w+)\s*\([^()]*\)\s*\{",
    re.IGNORECASE,
)

CALL = re.compile(r"\b(\w+)\s*\(")

SORT_CALL = re.compile(
    r"\.(?:sort|sorted)\s*\(|\bsorted\s*\(|\bqsort\b|std::sort\b|Collections\.sort\b",
    re.IGNORECASE,
)

LOG_CALL = re.compile(
    r"(?<!console\.)\blog2?\s*\(|\bMath\.log2?\s*\(|\bbinarySearch\s*\(",
    re.IGNORECASE,
)

ARRAY = re.compile(
    r"\[\s*\]|new\s+Array\b|\bvector<|ArrayList<|\bstd::vector\b",
    re.IGNORECASE,
)

MAP = re.compile(r"Map\b|HashMap\b|unordered_map\b|std::map\b", re.IGNORECASE)

SET = re.compile(r"Set\b|HashSet\b|std::set\b", re.IGNORECASE)

ALLOCATION = re.compile(r"new\s+\w+\s*\(|\{\s*\}")


# Halving / binary-search shapes. The loop body runs to the first closing brace.
LOOP_BODY = re.compile(r"\b(?:for|while)[^{]{0,200}\{([^}]{0,1000})\}", re.IGNORECASE)

HALVING = re.compile(
    r"\b([a-zA-Z_$][\w$]*)\s*(?:=|/=|//=)\s*\1\s*//?\s*2\b"
    r"|\b[a-zA-Z_$][\w$]*\s*//?=\s*2\b"
    r"|>>=\s*1|>>\s*1"
    r"|\bMath\.floor\([^)]*/\s*2\)",
    re.IGNORECASE,
)

MID_ASSIGNMENT = re.compile(r"\bmid\b\s*=\s*[^;\n]*", re.IGNORECASE)

BOUND_NAME = re.compile(r"\b(?:low|left|lo|high|right|hi|start|end)\b", re.IGNORECASE)

MID_LINE = re.compile(r"mid\s*=\s*[^;\n]*", re.IGNORECASE)

BOUND_MOVE = re.compile(
    r"\b(?:start|low|left|lo)\s*=\s*mid\s*\+\s*1"
    r"|\b(?:end|high|right|hi)\s*=\s*mid\s*-\s*1",
    re.IGNORECASE,
)

FOR_HEADER_HALVING = re.compile(
    r"for\s*\([^);]{0,200};[^;]{0,200};[^)]{0,200}(?:/\s*2|>>\s*1|>>=\s*1|Math\.floor\([^)]{0,200}/\s*2\))",
    re.IGNORECASE,
)


def count(pattern: re.Pattern[str], text: str) -> int:
    """Number of non-overlapping matches of ``pattern`` in ``text``."""
    return sum(1 for _ in pattern.finditer(text))


def count_recursion(text: str) -> int:
    """
    Number of function heads whose own body calls the head's name.

    A body runs from the end of its head to the start of the next head,
    so nested definitions end the enclosing body early.
    """
    heads = list(FUNCTION_HEAD.finditer(text))
    found = 0
    for index, head in enumerate(heads):
        name = (head.group(1) or head.group(2)).lower()
        end = heads[index + 1].start() if index + 1 < len(heads) else len(text)
        if any(call.group(1).lower() == name for call in CALL.finditer(text, head.end(), end)):
            found += 1
    return found


def detect_logarithmic_loop(text: str) -> bool:
    """
    Look for loops that shrink their range by half on every pass.

    Checks, in order: halving inside a loop body, a ``mid`` assignment
    next to bound names inside a loop body, ``mid`` plus a
    ``low = mid + 1`` / ``high = mid - 1`` move anywhere in the text,
    and a C-style ``for`` header whose increment halves.
    """
    for match in LOOP_BODY.finditer(text):
        body = match.group(1) or ""
        if HALVING.search(body):
            return True
        if MID_ASSIGNMENT.search(body) and BOUND_NAME.search(body):
            return True

    if MID_LINE.search(text) and BOUND_MOVE.search(text):
        return True

    return FOR_HEADER_HALVING.search(text) is not None


def extract(text: str) -> FeatureVector:
    """
    Build the feature vector for ``text``.

    Args:
        text: Source code in any language; may be empty or garbage

    Returns:
        FeatureVector with all counts (all zero when nothing matches)
    """
    features = FeatureVector(
        loop_count=count(LOOP, text),
        nested_loop_count=count(NESTED_LOOP, text),
        recursion_count=count_recursion(text),
        sort_call_count=count(SORT_CALL, text),
        log_call_count=count(LOG_CALL, text),
        array_literal_count=count(ARRAY, text),
        map_type_count=count(MAP, text),
        set_type_count=count(SET, text),
        allocation_count=count(ALLOCATION, text),
        logarithmic_loop=detect_logarithmic_loop(text),
    )
    logger.debug("Extracted features: %s", features)
    return features
