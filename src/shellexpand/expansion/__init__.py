"""Expansion stages for shellexpand."""

from .braces import expand_braces
from .params import PositionalParams, expand_parameter, expand_params, expand_word
from .quotes import remove_quotes
from .tilde import expand_tilde

__all__ = [
    "expand_braces",
    "expand_tilde",
    "expand_params",
    "expand_parameter",
    "expand_word",
    "remove_quotes",
    "PositionalParams",
]
