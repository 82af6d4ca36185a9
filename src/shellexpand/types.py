"""Collaborator, option and variable store types for shellexpand."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .errors import ParameterAssignmentError, ReadonlyVariableError
from .glob import GlobPattern, compile_glob
from .parser.lexer import is_numeric_string_without_leading_zero, match_name


@dataclass
class ExpansionCallbacks:
    """Caller-supplied collaborators used during expansion.

    Ordinary variable names are passed bare ("HOME"). Positional and
    special parameters keep their '$' ("$1", "$#", "$*").
    """

    lookup_var: Callable[[str], tuple[str, bool]]
    """Return (value, found) for a variable."""

    assign_to_var: Optional[Callable[[str, str], None]] = None
    """Assign a value for ${var:=word}; raise to abort the expansion."""

    lookup_home_dir: Optional[Callable[[str], tuple[str, bool]]] = None
    """Return (path, found) for a user's home directory, for ~user."""

    match_var_names: Optional[Callable[[str], list[str]]] = None
    """Return the names of all variables starting with a prefix."""

    compile_glob: Callable[[str], GlobPattern] = compile_glob
    """Compile a glob pattern for the removal, replace and case operators."""

    def assign(self, name: str, value: str) -> None:
        """Assign through assign_to_var, failing if none was supplied."""
        if self.assign_to_var is None:
            raise ParameterAssignmentError(name, "cannot assign in this way")
        self.assign_to_var(name, value)

    def home_dir(self, username: str) -> tuple[str, bool]:
        if self.lookup_home_dir is None:
            return "", False
        return self.lookup_home_dir(username)

    def var_names(self, prefix: str) -> list[str]:
        if self.match_var_names is None:
            return []
        return list(self.match_var_names(prefix))


@dataclass
class ExpansionOptions:
    """Which stages of the expansion pipeline run."""

    brace_expansion: bool = True
    """a{b,c} and {1..3}."""

    tilde_expansion: bool = True
    """~, ~+, ~- and ~user at the start of a word."""

    parameter_expansion: bool = True
    """$name and ${...}."""

    quote_removal: bool = True
    """Drop the backslash from escaped characters."""


class VariableStore(dict):
    """Dict of shell variables that can serve every expansion callback.

    Ordinary variables are the dict's own items. Positional parameters,
    special parameters ("?", "$", "0", ...) and home directories are kept
    alongside, along with the set of readonly names.
    """

    positional: list[str]
    special: dict[str, str]
    home_dirs: dict[str, str]
    readonly: set[str]

    def __init__(
        self,
        *args,
        positional: Optional[list[str]] = None,
        special: Optional[dict[str, str]] = None,
        home_dirs: Optional[dict[str, str]] = None,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.positional = list(positional or [])
        self.special = dict(special or {})
        self.home_dirs = dict(home_dirs or {})
        self.readonly = set()

    def is_readonly(self, name: str) -> bool:
        return name in self.readonly

    def mark_readonly(self, name: str) -> None:
        """Make later assignments to name raise ReadonlyVariableError."""
        self.readonly.add(name)

    def lookup_var(self, name: str) -> tuple[str, bool]:
        if not name.startswith("$"):
            if name in self:
                return self[name], True
            return "", False

        key = name[1:]
        if key == "#":
            return str(len(self.positional)), True
        if key in ("*", "@"):
            return " ".join(self.positional), True
        if is_numeric_string_without_leading_zero(key):
            index = int(key)
            if index <= len(self.positional):
                return self.positional[index - 1], True
            return "", False
        if key in self.special:
            return self.special[key], True
        return "", False

    def assign_to_var(self, name: str, value: str) -> None:
        """Assign an ordinary variable.

        Raises:
            ParameterAssignmentError: name is a positional or special
                parameter, or not a valid variable name.
            ReadonlyVariableError: the variable is readonly.
        """
        if match_name(name, 0) != len(name):
            raise ParameterAssignmentError(name, "cannot assign in this way")
        if self.is_readonly(name):
            raise ReadonlyVariableError(name)
        self[name] = value

    def lookup_home_dir(self, username: str) -> tuple[str, bool]:
        if username in self.home_dirs:
            return self.home_dirs[username], True
        return "", False

    def match_var_names(self, prefix: str) -> list[str]:
        return sorted(k for k in self if k.startswith(prefix))

    def callbacks(self, compile_glob: Callable[[str], GlobPattern] = compile_glob) -> ExpansionCallbacks:
        """Bundle this store's lookups into ExpansionCallbacks."""
        return ExpansionCallbacks(
            lookup_var=self.lookup_var,
            assign_to_var=self.assign_to_var,
            lookup_home_dir=self.lookup_home_dir,
            match_var_names=self.match_var_names,
            compile_glob=compile_glob,
        )

    def copy(self) -> VariableStore:
        """Create a shallow copy that includes parameters and readonly marks."""
        new = VariableStore(
            super().copy(),
            positional=self.positional,
            special=self.special,
            home_dirs=self.home_dirs,
        )
        new.readonly = set(self.readonly)
        return new
