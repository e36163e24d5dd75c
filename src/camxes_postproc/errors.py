"""
Errors raised by the postprocessor.

Malformed top-level input and malformed options are fatal to a call and are
reported with one of these. A single malformed node inside an otherwise valid
tree is not an error: it is turned into opaque leaf text and logged.
"""


class PostprocError(Exception):
    """
    User-facing, structured error.

    Carries a short machine-readable code next to the human message so
    presenters can branch on the kind of failure without parsing text.
    """

    code = "postproc_error"

    def __init__(self, message: str, code: str | None = None):
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidInputError(PostprocError):
    """The parse tree is neither a composite node nor a JSON array."""

    code = "invalid_input"


class InvalidOptionError(PostprocError, ValueError):
    """The mode is neither a known letter string nor a legacy code in range."""

    code = "invalid_option"


class DepthLimitError(PostprocError):
    """The tree nests deeper than the configured limit."""

    code = "depth_limit"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Parse tree nesting exceeds the depth limit of {limit}")
