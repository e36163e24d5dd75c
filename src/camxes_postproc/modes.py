"""
Mode decoding: letter flags or legacy numeric codes into an option set.

Letters:
    M  keep morphology
    S  show spaces
    T  show terminators
    C  show word classes (selmaho)
    R  raw output, do not trim the tree
    N  show main node labels
    J  JSON output
    !  no "label:" prefix on leaves

Legacy codes (0..31) predate the letters. Bit 3 shows spaces, bit 4 keeps
morphology, and the low three bits pick one of eight canned combinations.
Every legacy code decodes to exactly the options of its letter equivalent.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidOptionError


@dataclass(frozen=True)
class Options:
    """Display options for one postprocessing call."""
    keep_morphology: bool = False
    show_spaces: bool = False
    show_terminators: bool = False
    show_selmaho: bool = False
    trim: bool = True
    show_node_labels: bool = False
    json_format: bool = False
    no_leaf_prefix: bool = False

    @property
    def prefix_leaf_labels(self) -> bool:
        """Whether remaining labels are glued to their single leaf ("UI:ui")."""
        return (self.show_node_labels or self.show_selmaho) and not self.no_leaf_prefix


# Letter -> Options field it switches on. 'R' is handled separately: it
# switches trimming off.
LETTER_FLAGS = {
    "M": "keep_morphology",
    "S": "show_spaces",
    "T": "show_terminators",
    "C": "show_selmaho",
    "N": "show_node_labels",
    "J": "json_format",
    "!": "no_leaf_prefix",
}
RAW_LETTER = "R"

LEGACY_CODE_RANGE = range(32)


def options_from_letters(letters: str) -> Options:
    """Decode a letter-flag string. Order and repetition don't matter."""
    unknown = sorted(set(letters) - set(LETTER_FLAGS) - {RAW_LETTER})
    if unknown:
        raise InvalidOptionError(
            f"Unknown mode letter(s) {''.join(unknown)!r} in {letters!r}. "
            f"Valid letters: {''.join(LETTER_FLAGS)}{RAW_LETTER}"
        )
    values = {attr: letter in letters for letter, attr in LETTER_FLAGS.items()}
    return Options(trim=RAW_LETTER not in letters, **values)


def letters_from_legacy_code(code: int) -> str:
    """Translate a legacy numeric mode into its letter equivalent."""
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidOptionError(f"Legacy mode must be an integer, got {type(code).__name__}")
    if code not in LEGACY_CODE_RANGE:
        raise InvalidOptionError(f"Legacy mode must be in 0..31, got {code}")

    mode = ""
    if code & 8:
        mode += "S"
    if code & 16:
        mode += "M"
    combo = code % 8
    if combo == 0:
        mode += "J"
    if combo <= 1:
        mode += "R"
    if combo > 2 and combo != 5:
        mode += "C"
    if combo in (4, 7):
        mode += "N"
    if combo < 5:
        mode += "T"
    return mode


def options_to_letters(options: Options) -> str:
    """Canonical letter string for an option set."""
    letters = "".join(
        letter for letter, attr in LETTER_FLAGS.items() if getattr(options, attr)
    )
    if not options.trim:
        letters += RAW_LETTER
    return letters


def decode_mode(mode: str | int | Options) -> Options:
    """Accept any supported mode representation and return the option set."""
    if isinstance(mode, Options):
        return mode
    if isinstance(mode, bool):
        raise InvalidOptionError("Mode must be a letter string or a legacy integer, got bool")
    if isinstance(mode, int):
        mode = letters_from_legacy_code(mode)
    if isinstance(mode, str):
        return options_from_letters(mode)
    raise InvalidOptionError(
        f"Mode must be a letter string or a legacy integer, got {type(mode).__name__}"
    )
