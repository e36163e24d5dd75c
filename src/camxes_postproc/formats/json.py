"""
JSON output format.

Serializes the rewritten tree back into the parser's wire form
(nested arrays of strings).
"""

from ..dom import ParseNode
from ..modes import Options
from .base import OutputFormat, compact_json, registry


class JSONFormat(OutputFormat):
    """Compact JSON text of the rewritten tree."""

    @property
    def name(self) -> str:
        return "json"

    def render(self, node: ParseNode | None, options: Options) -> str:
        return compact_json(node)


registry.register(JSONFormat())
