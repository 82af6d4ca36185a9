"""Exceptions raised by shellexpand.

Malformed expansion syntax is never an error: the offending text is left
untouched in the output. Exceptions are reserved for the standalone brace
matcher and for failures reported by collaborators (variable assignment,
glob compilation).
"""


class ShellExpandError(Exception):
    """Base class for all shellexpand exceptions."""
    pass


class MismatchedBraceError(ShellExpandError):
    """Raised when an opening brace has no matching closing brace."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"mismatched brace: '{{' at offset {offset} is never closed")


class MismatchedClosingBraceError(ShellExpandError):
    """Raised when a closing brace is found with no open brace before it."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"mismatched closing brace: '}}' at offset {offset} has no opening brace")


class GlobPatternError(ShellExpandError):
    """Raised when a glob pattern cannot be compiled."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"bad or unsupported glob pattern '{pattern}': {reason}")


class ParameterAssignmentError(ShellExpandError):
    """Raised when ${var:=word} cannot assign to its parameter."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"{name}: {reason}")


class ReadonlyVariableError(ParameterAssignmentError):
    """Raised when assigning to a variable marked readonly."""

    def __init__(self, name: str):
        super().__init__(name, "readonly variable")
