"""
Base output format interface and registry.

Each format strategy turns a rewritten parse tree into text for a presenter
(console, chat client, browser). The registry manages lookup by name.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod

from ..dom import ParseNode, to_json
from ..modes import Options


class OutputFormat(ABC):
    """Base class for output renderers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Format name used for lookup."""
        ...

    def adjust_options(self, options: Options) -> Options:
        """
        Options actually used to rewrite the tree for this format.
        Default: the caller's options unchanged.
        """
        return options

    @abstractmethod
    def render(self, node: ParseNode | None, options: Options) -> str:
        """
        Render a rewritten tree. None means the whole tree was deleted.
        """
        ...


def compact_json(node: ParseNode | None) -> str:
    """Compact JSON text of a tree, '[]' for a deleted tree."""
    payload = to_json(node) if node is not None else []
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


class FormatRegistry:
    """Registry of output formats."""

    def __init__(self):
        self._formats: list[OutputFormat] = []
        self._by_name: dict[str, OutputFormat] = {}

    def register(self, fmt: OutputFormat) -> None:
        """Register an output format. Later registrations replace earlier ones."""
        self._formats = [f for f in self._formats if f.name != fmt.name]
        self._formats.append(fmt)
        self._by_name[fmt.name] = fmt

    def get_by_name(self, name: str) -> OutputFormat | None:
        """Get format by name."""
        return self._by_name.get(name.lower())

    @property
    def formats(self) -> list[OutputFormat]:
        """List all registered formats."""
        return list(self._formats)


# Global registry instance
registry = FormatRegistry()
