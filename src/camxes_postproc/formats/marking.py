"""
Marking game format.

Shows only the main sentence structure: words separated by spaces, with a
distinct bracket pair around each prenex, sentence, sumti and selbri.

    {[mi] <klama> [le zarci]}
"""

from dataclasses import replace

from ..classify import canonical_name
from ..dom import Leaf, ParseNode, node_name
from ..modes import Options
from .base import OutputFormat, registry

BRACKET_PAIRS = {
    "prenex": ("⟦", "⟧"),
    "sentence": ("{", "}"),
    "sumti": ("[", "]"),
    "selbri": ("<", ">"),
}


class MarkingFormat(OutputFormat):
    """Words with bracketed main constituents, every other label dropped."""

    @property
    def name(self) -> str:
        return "marking"

    def adjust_options(self, options: Options) -> Options:
        """
        Keep the main labels only. Words are always whole, without word
        classes, "label:" prefixes, spaces or terminators.
        """
        return replace(
            options,
            keep_morphology=False,
            show_spaces=False,
            show_terminators=False,
            trim=True,
            show_node_labels=True,
            show_selmaho=False,
            no_leaf_prefix=True,
            json_format=False,
        )

    def render(self, node: ParseNode | None, options: Options) -> str:
        if node is None:
            return ""
        return self._render(node)

    def _render(self, node: ParseNode) -> str:
        if isinstance(node, Leaf):
            return node.text
        words = " ".join(part for part in map(self._render, node.children) if part)
        pair = BRACKET_PAIRS.get(canonical_name(node_name(node)) or "")
        if pair is None:
            return words
        return pair[0] + words + pair[1]


registry.register(MarkingFormat())
