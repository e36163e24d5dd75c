"""
Action resolution: which rewrite each node gets under a given option set.

Flattening (collapse content to surface text) and trimming (drop the label)
are independent axes; deletion overrides both:

    DEL       delete the whole branch
    TRIM      drop the label; a lone remaining child replaces the node
    FLAT      replace the content with its concatenated leaves, keep the label
    TRIMFLAT  replace the whole node with its concatenated leaves
    UNBOX     a node with nothing but its label collapses to that label
    PASS      leave the node as is
"""

from __future__ import annotations

from collections.abc import Callable, Collection
from enum import Enum

from .classify import (
    MORPHOLOGY_NAMES,
    NODE_LABEL_NAMES,
    SPACE_NAMES,
    among,
    canonical_name,
    is_selmaho,
)
from .dom import ParseNode, node_name, node_size
from .modes import Options


class Action(str, Enum):
    DEL = "DEL"
    TRIM = "TRIM"
    FLAT = "FLAT"
    TRIMFLAT = "TRIMFLAT"
    UNBOX = "UNBOX"
    PASS = "PASS"


ActionResolver = Callable[[ParseNode], Action]


def build_action_resolver(
    options: Options,
    morphology_names: Collection[str] = MORPHOLOGY_NAMES,
    node_label_names: Collection[str] = NODE_LABEL_NAMES,
    space_names: Collection[str] = SPACE_NAMES,
) -> ActionResolver:
    """
    Build the node -> action function for one option set.

    The vocabularies are injected so callers can classify other grammars; the
    defaults are the ones the parser's grammar produces.
    """
    whitelist: list[str] = []
    if options.show_selmaho:
        whitelist.extend(morphology_names)
    if options.show_node_labels:
        whitelist.extend(node_label_names)

    def is_branch_removal_target(name: str | None, size: int) -> bool:
        if not options.show_spaces and among(name, space_names):
            return True
        return not options.show_terminators and is_selmaho(name) and size == 1

    def is_flattening_target(name: str | None) -> bool:
        if options.keep_morphology:
            return False
        return among(name, morphology_names) or is_selmaho(name)

    def is_trimming_target(name: str | None, size: int) -> bool:
        if not options.trim:
            return False
        if options.show_terminators and is_selmaho(name) and size == 1:
            return False
        if options.show_selmaho and is_selmaho(name):
            return False
        return not among(name, whitelist)

    def action_for(node: ParseNode) -> Action:
        name = canonical_name(node_name(node))
        size = node_size(node)
        if is_branch_removal_target(name, size):
            return Action.DEL
        flatten = is_flattening_target(name)
        trim = is_trimming_target(name, size)
        if flatten and trim:
            return Action.TRIMFLAT
        if flatten:
            return Action.FLAT
        if trim:
            return Action.TRIM
        if options.trim and size == 1:
            return Action.UNBOX
        return Action.PASS

    return action_for
