"""
Text output format.

Renders the tree as its compact JSON with quotes dropped and commas turned
into spaces, then prettifies the brackets:

    ["BRIDI:",["SUMTI","mi"],"SELBRI:klama"]  ->  (BRIDI: [SUMTI mi] SELBRI:klama)
"""

import re

from ..brackets import prettify_brackets
from ..config import get_config
from ..dom import ParseNode
from ..modes import Options
from .base import OutputFormat, compact_json, registry

# A label directly followed by a nested branch: "[KOhA,[" -> "[KOhA: ["
_LABEL_BEFORE_BRANCH = re.compile(r"\[([a-zA-Z0-9_-]+),\[")


class TextFormat(OutputFormat):
    """Human-readable bracketed text."""

    @property
    def name(self) -> str:
        return "text"

    def render(self, node: ParseNode | None, options: Options) -> str:
        output = compact_json(node).replace('"', "")
        if options.show_selmaho:
            output = _LABEL_BEFORE_BRANCH.sub(r"[\1: [", output)
        output = output.replace(",", " ")

        cfg = get_config().render
        return prettify_brackets(
            output,
            open_brackets=cfg.open_brackets,
            close_brackets=cfg.close_brackets,
            digits=cfg.superscript_digits,
        )


registry.register(TextFormat())
