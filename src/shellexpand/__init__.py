"""UNIX shell string expansion for Python.

Brace, tilde and parameter expansion plus quote removal, applied to a
single string with caller-supplied variable lookups.
"""

import logging

from .errors import (
    GlobPatternError,
    MismatchedBraceError,
    MismatchedClosingBraceError,
    ParameterAssignmentError,
    ReadonlyVariableError,
    ShellExpandError,
)
from .expander import ShellExpander, expand
from .expansion import expand_braces, expand_params, expand_tilde, remove_quotes
from .glob import GlobPattern, compile_glob
from .parser import match_braces
from .types import ExpansionCallbacks, ExpansionOptions, VariableStore

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "expand",
    "ShellExpander",
    # Stages
    "expand_braces",
    "expand_tilde",
    "expand_params",
    "remove_quotes",
    "match_braces",
    # Collaborators and options
    "ExpansionCallbacks",
    "ExpansionOptions",
    "VariableStore",
    "GlobPattern",
    "compile_glob",
    # Errors
    "ShellExpandError",
    "MismatchedBraceError",
    "MismatchedClosingBraceError",
    "GlobPatternError",
    "ParameterAssignmentError",
    "ReadonlyVariableError",
]
