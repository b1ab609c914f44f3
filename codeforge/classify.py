"""
Code-versus-prose classification for generated content.

The generation oracle is asked to tag its reply with `kind`. When it
does not, these heuristics decide whether the content should be offered
as an editor replacement (code) or shown as an answer (text).
"""

import re
from typing import Callable

CODE = "code"
TEXT = "text"

Classifier = Callable[[str], str]

_CODE_PATTERNS = (
    re.compile(r"^\s*```"),
    re.compile(r"^\s*(import|from|package|using|#include)\b"),
    re.compile(r"^\s*(class|def|for|while|if|function|fn|func|const|let|var)\s"),
    re.compile(r"^\s*<(!DOCTYPE|html)", re.IGNORECASE),
)


def looks_like_code(content: str) -> bool:
    if not content or not content.strip():
        return False
    if "public static void main" in content:
        return True
    return any(p.search(content) for p in _CODE_PATTERNS)


def classify_content(content: str) -> str:
    return CODE if looks_like_code(content) else TEXT


def resolve_kind(content: str, declared: str | None, classifier: Classifier = classify_content) -> str:
    """Prefer the oracle's declared kind; fall back to the classifier."""
    if isinstance(declared, str) and declared.strip().lower() in (CODE, TEXT):
        return declared.strip().lower()
    return classifier(content)


def strip_fences(content: str) -> str:
    """Remove a single surrounding markdown code fence, if present."""
    stripped = content.strip()
    if not stripped.startswith("```"):
        return content
    lines = stripped.split("\n")[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    return "\n".join(lines)
