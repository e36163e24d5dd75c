"""
Tree rewriting.

Implements:
- Per-node action dispatch (delete, trim, flatten, unbox, pass)
- Label renaming and leaf value substitution
- Deletion propagation: a child that rewrites to nothing leaves no slot
- Single-element unboxing and "label:leaf" collapsing
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .actions import Action, ActionResolver, build_action_resolver
from .classify import NAME_SUBSTITUTIONS, SPACE_NAMES, SPACE_PLACEHOLDER
from .config import get_config
from .dom import Labeled, Leaf, ParseNode, Unlabeled, is_empty, leaf_text, opaque_leaf
from .errors import DepthLimitError
from .modes import Options

logger = logging.getLogger(__name__)


def substitution_maps(options: Options) -> tuple[dict[str, str], dict[str, str]]:
    """
    Build (value_substitutions, name_substitutions) for an option set.

    Shown spaces are replaced by a placeholder; display renaming only
    applies when the tree is trimmed.
    """
    values = dict.fromkeys(SPACE_NAMES, SPACE_PLACEHOLDER) if options.show_spaces else {}
    names = dict(NAME_SUBSTITUTIONS) if options.trim else {}
    return values, names


class TreeRewriter:
    """One configured rewriting pass over parse trees."""

    def __init__(
        self,
        action_for: ActionResolver,
        value_substitutions: Mapping[str, str] | None = None,
        name_substitutions: Mapping[str, str] | None = None,
        prefix_leaf_labels: bool = False,
        max_depth: int | None = None,
    ):
        self.action_for = action_for
        self.value_substitutions = dict(value_substitutions or {})
        self.name_substitutions = dict(name_substitutions or {})
        self.prefix_leaf_labels = prefix_leaf_labels
        self.max_depth = get_config().rewrite.max_depth if max_depth is None else max_depth

    @classmethod
    def for_options(cls, options: Options, max_depth: int | None = None) -> TreeRewriter:
        values, names = substitution_maps(options)
        return cls(
            action_for=build_action_resolver(options),
            value_substitutions=values,
            name_substitutions=names,
            prefix_leaf_labels=options.prefix_leaf_labels,
            max_depth=max_depth,
        )

    def rewrite(self, node: ParseNode) -> ParseNode | None:
        """Rewrite node and its subtree. None means the node is deleted."""
        try:
            return self._rewrite(node, 0)
        except RecursionError as e:
            # configured limit is above what the interpreter can nest
            raise DepthLimitError(self.max_depth) from e

    def _rewrite(self, node: ParseNode, depth: int) -> ParseNode | None:
        if depth > self.max_depth:
            raise DepthLimitError(self.max_depth)
        if isinstance(node, Leaf):
            return node
        if is_empty(node):
            return None

        action = self.action_for(node)
        if action is Action.DEL:
            return None

        name = node.name if isinstance(node, Labeled) else None
        if name is not None:
            value = self.value_substitutions.get(name)
            if action is Action.TRIM:
                if value is not None:
                    return Leaf(value)
                name = None
            else:
                name = self.name_substitutions.get(name, name)
                if value is not None:
                    return Labeled(name, [Leaf(value)])

        if action is Action.FLAT:
            return self._flatten(node, name)
        if action is Action.TRIMFLAT:
            return Leaf(leaf_text(node))

        children: list[ParseNode] = []
        for child in node.children:
            if isinstance(child, Leaf):
                children.append(child)
                continue
            if not isinstance(child, Labeled | Unlabeled):
                children.append(opaque_leaf(child))
                continue
            result = self._rewrite(child, depth + 1)
            if result is not None:
                children.append(result)

        if not children and (name is None or node.children):
            # everything below was deleted
            return None
        return self._collapse(name, children, action)

    def _flatten(self, node: ParseNode, name: str | None) -> ParseNode:
        text = leaf_text(node)
        if name is None:
            return Leaf(text)
        if not text:
            return Leaf(name)
        if self.prefix_leaf_labels:
            return Leaf(f"{name}:{text}")
        return Labeled(name, [Leaf(text)])

    def _collapse(self, name: str | None, children: list[ParseNode], action: Action) -> ParseNode:
        # The label slot counts as an element, like in the wire form
        elements = len(children) + (name is not None)
        if elements == 1 and action is not Action.PASS:
            return Leaf(name) if name is not None else children[0]

        if (self.prefix_leaf_labels and name is not None
                and len(children) == 1 and isinstance(children[0], Leaf)):
            text = children[0].text
            if ":" not in text:
                return Leaf(f"{name}:{text}")
            # "A:b:c" would be ambiguous, keep the nesting and mark the label
            if not name.endswith(":"):
                name += ":"

        if name is not None:
            return Labeled(name, children)
        return Unlabeled(children)


def process_parse_tree(
    parse_tree: ParseNode,
    value_substitutions: Mapping[str, str],
    name_substitutions: Mapping[str, str],
    action_for: ActionResolver,
    prefix_leaf_labels: bool,
) -> ParseNode | None:
    """Rewrite a tree with explicit maps and an arbitrary action resolver."""
    rewriter = TreeRewriter(
        action_for=action_for,
        value_substitutions=value_substitutions,
        name_substitutions=name_substitutions,
        prefix_leaf_labels=prefix_leaf_labels,
    )
    return rewriter.rewrite(parse_tree)


def rewrite_tree(parse_tree: ParseNode, options: Options) -> ParseNode | None:
    """Rewrite a tree according to an option set."""
    logger.debug("Rewriting parse tree with %s", options)
    return TreeRewriter.for_options(options).rewrite(parse_tree)
