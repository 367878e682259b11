"""typedmessage exception hierarchy.

Build-time problems with individual locale files are raised as
LocaleFileError and collected by the reconciler; they never abort a whole
generation run. Runtime loader failures are not wrapped: the controller
re-raises whatever the caller-supplied loader raised.
"""

__all__ = [
    "LocaleFileError",
    "MessageContextError",
    "TypedMessageError",
]


class TypedMessageError(Exception):
    """Base exception for all typedmessage errors."""


class LocaleFileError(TypedMessageError):
    """A locale source file could not be read or parsed.

    Attributes:
        filename: Locale file name (without directory)
        reason: Human-readable description of the failure
    """

    def __init__(self, filename: str, reason: str) -> None:
        """Initialize LocaleFileError.

        Args:
            filename: Locale file name (e.g., 'en.json5')
            reason: Underlying failure description
        """
        super().__init__(f"Invalid locale file '{filename}': {reason}")
        self.filename = filename
        self.reason = reason


class MessageContextError(TypedMessageError):
    """Message lookup helper used outside of a message provider.

    Indicates a programming error rather than a data condition, so it is
    raised immediately instead of falling back to a default dictionary.
    """
