"""
Postprocessing entry point.

Takes the parser's raw tree (nodes, nested lists, or JSON text), rewrites it
once according to the display mode, and hands it to an output format.
"""

from __future__ import annotations

import json
import logging

from .config import get_config
from .dom import Labeled, ParseNode, Unlabeled, from_json
from .errors import DepthLimitError, InvalidInputError, InvalidOptionError
from .formats import json as _json  # noqa: F401 - ensure json format is registered
from .formats import marking as _marking  # noqa: F401 - ensure marking format is registered
from .formats import text as _text  # noqa: F401 - ensure text format is registered
from .formats.base import OutputFormat, registry
from .modes import Options, decode_mode
from .rewrite import rewrite_tree

logger = logging.getLogger(__name__)

Mode = str | int | Options


def load_tree(parse_tree: object) -> ParseNode:
    """
    Accept a composite node, a list, or JSON text of a list.
    Anything else is rejected before any rewriting happens.
    """
    if isinstance(parse_tree, str):
        try:
            parse_tree = json.loads(parse_tree)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Parse tree is not valid JSON: {e}") from e
        except RecursionError as e:
            raise DepthLimitError(get_config().rewrite.max_depth) from e

    if isinstance(parse_tree, Labeled | Unlabeled):
        return parse_tree
    if not isinstance(parse_tree, list):
        raise InvalidInputError(
            "Invalid parse tree: expected a composite node, a list or a JSON "
            f"stringified array, got {type(parse_tree).__name__}"
        )
    return from_json(parse_tree)


def get_format(format_type: str) -> OutputFormat:
    """Look up an output format by name."""
    fmt = registry.get_by_name(format_type)
    if fmt is None:
        known = ", ".join(f.name for f in registry.formats)
        raise InvalidOptionError(f"Unknown output format {format_type!r}. Known formats: {known}")
    return fmt


def resolve_options(mode: Mode | None) -> Options:
    """Decode the caller's mode, falling back to the configured default."""
    if mode is None:
        mode = get_config().mode.default
    options = decode_mode(mode)
    logger.debug("Decoded mode %r as %s", mode, options)
    return options


def postprocess_tree(parse_tree: object, mode: Mode | None = None) -> ParseNode | None:
    """Rewrite a parse tree without rendering it. None if nothing is left."""
    options = resolve_options(mode)
    root = load_tree(parse_tree)
    return rewrite_tree(root, options)


def postprocess(
    parse_tree: object,
    mode: Mode | None = None,
    format_type: str | None = None,
) -> str | ParseNode:
    """
    Rewrite a parse tree and render it.

    Args:
        parse_tree: Parser output, as nodes, nested lists or JSON text
        mode: Letter flags ("CN", "MST"...), a legacy code 0..31, or Options
        format_type: Force an output format ("text", "json", "marking")

    Returns:
        The rewritten tree when the mode asks for JSON and no format is
        forced, rendered text otherwise
    """
    options = resolve_options(mode)
    root = load_tree(parse_tree)

    if format_type is None and options.json_format:
        result = rewrite_tree(root, options)
        return result if result is not None else Unlabeled([])

    fmt = get_format(format_type or "text")
    options = fmt.adjust_options(options)
    return fmt.render(rewrite_tree(root, options), options)


# Name kept for callers of the older API
postprocessing = postprocess
