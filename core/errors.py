"""
Exceptions raised by the subtitle decoding, parsing and alignment pipeline.

Every error carries enough context to be shown verbatim to an end user.
None of them are transient: callers should report and stop, not retry.
"""

from typing import Optional, Sequence


class SubstudyError(Exception):
    """Base class for all errors surfaced by substudy."""
    pass


class DecodeError(SubstudyError):
    """Raised when a byte stream cannot be decoded with any candidate encoding."""

    def __init__(self, message: str, encodings: Sequence[str] = (),
                 position: Optional[int] = None):
        self.encodings = tuple(encodings)
        self.position = position
        details = message
        if self.encodings:
            details += f" (tried: {', '.join(self.encodings)})"
        if position is not None:
            details += f" at byte {position}"
        super().__init__(details)


class ParseError(SubstudyError):
    """Raised for the first malformed cue block in a subtitle file."""

    def __init__(self, line: int, reason: str, text: Optional[str] = None):
        self.line = line
        self.reason = reason
        self.text = text
        message = f"line {line}: {reason}"
        if text is not None:
            message += f": {text!r}"
        super().__init__(message)


class AlignmentError(SubstudyError):
    """Raised when a track handed to the aligner violates a span invariant."""
    pass
