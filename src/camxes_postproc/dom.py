"""
DOM - Parse tree model for the postprocessor

The grammar parser emits a loosely-typed tree of nested arrays. Here that tree
is a sum of three node shapes:

- Leaf: a terminal token value
- Labeled: a named non-terminal with ordered children (possibly none)
- Unlabeled: a bare sequence, produced when a rule yields no name

Key invariant: the rewriter never mutates a tree; every pass builds new nodes.
"Absent" (a deleted subtree) is None, never an empty Leaf.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .config import get_config
from .errors import DepthLimitError

logger = logging.getLogger(__name__)


@dataclass
class Leaf:
    """A terminal token value."""
    text: str


@dataclass
class Labeled:
    """A named non-terminal."""
    name: str
    children: list[ParseNode] = field(default_factory=list)


@dataclass
class Unlabeled:
    """A node whose first slot is itself a node rather than a name."""
    children: list[ParseNode] = field(default_factory=list)


ParseNode = Leaf | Labeled | Unlabeled


def node_name(node: ParseNode) -> str | None:
    """Name of a labeled node, None for anything else."""
    if isinstance(node, Labeled):
        return node.name
    return None


def node_size(node: ParseNode) -> int:
    """
    Structural size as seen in the wire form: the name slot counts as one
    element. A labeled node with size 1 carries nothing but its name.
    """
    if isinstance(node, Labeled):
        return 1 + len(node.children)
    if isinstance(node, Unlabeled):
        return len(node.children)
    return 1


def is_empty(node: ParseNode) -> bool:
    """True for a node with neither a name nor children."""
    return isinstance(node, Unlabeled) and not node.children


def iter_leaves(node: ParseNode) -> Iterator[Leaf]:
    """Yield every leaf under node in document order, skipping name slots."""
    stack: list[ParseNode] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Leaf):
            yield current
        else:
            stack.extend(reversed(current.children))


def leaf_text(node: ParseNode) -> str:
    """Surface text of a subtree: all terminal values concatenated."""
    return "".join(leaf.text for leaf in iter_leaves(node))


def opaque_leaf(value: object) -> Leaf:
    """Contain a malformed tree element as leaf text instead of failing."""
    logger.warning("Unexpected %s in parse tree, kept as opaque text: %r",
                   type(value).__name__, value)
    try:
        return Leaf(json.dumps(value, ensure_ascii=False))
    except (TypeError, ValueError):
        return Leaf(str(value))


def from_json(value: object, max_depth: int | None = None) -> ParseNode:
    """
    Build nodes from the wire form (nested lists and strings).

    A list starting with a string is a labeled node, any other list is
    unlabeled. Scalars other than strings become opaque leaves.
    """
    if max_depth is None:
        max_depth = get_config().rewrite.max_depth
    try:
        return _from_json(value, 0, max_depth)
    except RecursionError as e:
        # configured limit is above what the interpreter can nest
        raise DepthLimitError(max_depth) from e


def _from_json(value: object, depth: int, max_depth: int) -> ParseNode:
    if depth > max_depth:
        raise DepthLimitError(max_depth)
    if isinstance(value, str):
        return Leaf(value)
    if isinstance(value, Leaf | Labeled | Unlabeled):
        return value
    if not isinstance(value, list | tuple):
        return opaque_leaf(value)

    if value and isinstance(value[0], str):
        return Labeled(
            name=value[0],
            children=[_from_json(v, depth + 1, max_depth) for v in value[1:]],
        )
    return Unlabeled(children=[_from_json(v, depth + 1, max_depth) for v in value])


def to_json(node: ParseNode) -> str | list:
    """Encode nodes back into the wire form."""
    if isinstance(node, Leaf):
        return node.text
    if isinstance(node, Labeled):
        return [node.name, *(to_json(child) for child in node.children)]
    return [to_json(child) for child in node.children]
