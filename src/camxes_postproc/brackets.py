"""
Bracket prettification for textual rendering of parse trees.

Nesting levels cycle through four bracket shapes. Every fourth level the
shape repeats, so the level count divided by four is written in superscript
digits outside the bracket: before an opening glyph, after a closing one.

    [[[[[a]]]]]  ->  ([{<¹(a)¹>}])
"""

from __future__ import annotations

from .errors import InvalidOptionError

OPEN_BRACKETS = "([{<"
CLOSE_BRACKETS = ")]}>"
SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"


def superscript(value: int, digits: str = SUPERSCRIPT_DIGITS) -> str:
    """Write a non-negative integer with the given digit glyphs. Zero is ''."""
    radix = len(digits)
    out = ""
    while value >= 1:
        value, rem = divmod(value, radix)
        out = digits[rem] + out
    return out


def prettify_brackets(
    text: str,
    open_brackets: str = OPEN_BRACKETS,
    close_brackets: str = CLOSE_BRACKETS,
    digits: str = SUPERSCRIPT_DIGITS,
) -> str:
    """
    Replace '[' / ']' by depth-rotating bracket glyphs.

    Only '[' and ']' are structural; every other character is copied as is.
    An unbalanced ']' at depth 0 renders at a negative depth rather than
    failing, matching the modulo arithmetic of the balanced case.
    """
    if len(open_brackets) != len(close_brackets) or not open_brackets:
        raise InvalidOptionError(
            f"Bracket sets must be non-empty and of equal length, "
            f"got {open_brackets!r} and {close_brackets!r}"
        )
    shapes = len(open_brackets)

    out: list[str] = []
    depth = 0
    for char in text:
        if char == "[":
            n = depth % shapes
            if depth > 0 and n == 0:
                out.append(superscript(depth // shapes, digits))
            out.append(open_brackets[n])
            depth += 1
        elif char == "]":
            depth -= 1
            n = depth % shapes
            out.append(close_brackets[n])
            if depth > 0 and n == 0:
                out.append(superscript(depth // shapes, digits))
        else:
            out.append(char)
    return "".join(out)
