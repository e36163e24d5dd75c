"""
Node classification.

Pure predicates over node names, plus the fixed vocabulary tables the
action resolver and the rewriter are built from.
"""

from __future__ import annotations

import re
from collections.abc import Collection

# Word-class tags: optional consonant, a vowel or diphthong, then any number
# of further vowels or diphthongs each introduced by 'h' (e.g. "KOhA", "BAI").
SELMAHO_PATTERN = re.compile(
    r"[IUBCDFGJKLMNPRSTVXZ]?(?:[AEIOUY]|AI|EI|OI|AU)(?:h(?:[AEIOUY]|AI|EI|OI|AU))*"
)

# Categories whose letter-level structure collapses to surface text
MORPHOLOGY_NAMES = ("cmevla", "gismu", "lujvo", "fuhivla", "ga_clause", "gu_clause")

SPACE_NAMES = ("spaces", "initial_spaces")

# Main structural labels kept by the "node labels" option
NODE_LABEL_NAMES = ("prenex", "sentence", "selbri", "sumti")

# Display names used when trimming is on
NAME_SUBSTITUTIONS = {
    "cmene": "C",
    "cmevla": "C",
    "gismu": "G",
    "lujvo": "L",
    "fuhivla": "Z",
    "prenex": "PRENEX",
    "sentence": "BRIDI",
    "selbri": "SELBRI",
    "sumti": "SUMTI",
}

SPACE_PLACEHOLDER = "_"

# Display name -> the category it was produced from. "C" comes from both
# cmene and cmevla; cmevla is the one the classifier knows about.
_SOURCE_NAMES = {display: source for source, display in NAME_SUBSTITUTIONS.items()}


def is_selmaho(name: object) -> bool:
    """True iff name is, in its entirety, a word-class tag."""
    if not isinstance(name, str):
        return False
    return SELMAHO_PATTERN.fullmatch(name) is not None


def among(name: object, names: Collection[str]) -> bool:
    """Exact membership of a node name in a fixed set."""
    return isinstance(name, str) and name in names


def canonical_name(name: str | None) -> str | None:
    """
    Category a possibly already-rewritten name stands for.

    Strips the leaf-prefix colon and maps display names back, so "BRIDI:" and
    "sentence" classify the same way. Grammar names pass through unchanged.
    """
    if name is None:
        return None
    stripped = name.rstrip(":") or name
    return _SOURCE_NAMES.get(stripped, stripped)
