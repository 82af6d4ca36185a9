"""Parser module for shellexpand."""

from .lexer import (
    is_shell_special_string,
    is_signed_numeric_string,
    match_brace_pattern,
    match_braces,
    match_param,
    match_param_op,
    match_tilde_prefix,
    match_var,
)
from .parser import (
    parse_brace_pattern,
    parse_brace_sequence,
    parse_parameter,
    parse_tilde_prefix,
)
from .types import (
    BracePair,
    BraceSequence,
    ParamKind,
    ParamOp,
    ParamType,
    ParameterDescriptor,
    TildeKind,
    TildePrefix,
)

__all__ = [
    # Lexer
    "is_shell_special_string",
    "is_signed_numeric_string",
    "match_brace_pattern",
    "match_braces",
    "match_param",
    "match_param_op",
    "match_tilde_prefix",
    "match_var",
    # Parser
    "parse_brace_pattern",
    "parse_brace_sequence",
    "parse_parameter",
    "parse_tilde_prefix",
    # Types
    "BracePair",
    "BraceSequence",
    "ParamKind",
    "ParamOp",
    "ParamType",
    "ParameterDescriptor",
    "TildeKind",
    "TildePrefix",
]
