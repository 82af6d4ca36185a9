"""Pipeline entry points for shellexpand.

Example usage:
    from shellexpand import ShellExpander, expand

    # With the built-in variable store
    expander = ShellExpander(env={"HOME": "/home/user", "NAME": "world"})
    expander.expand("~/{src,docs}/${NAME^}")
    # "/home/user/src/World /home/user/docs/World"

    # With your own lookups
    def lookup_var(name):
        return os.environ.get(name, ""), name in os.environ

    expand("$HOME", ExpansionCallbacks(lookup_var=lookup_var))
"""

from typing import Optional

from .expansion import expand_braces, expand_params, expand_tilde, remove_quotes
from .types import ExpansionCallbacks, ExpansionOptions, VariableStore


def expand(
    text: str,
    callbacks: ExpansionCallbacks,
    options: Optional[ExpansionOptions] = None,
) -> str:
    """Expand ``text`` the way a shell expands a word list.

    Stages run in a fixed order: braces, tilde, parameters, then quote
    removal. Text that is not a valid expansion passes through unchanged.

    Raises:
        ParameterAssignmentError: ${var:=word} could not assign.
        GlobPatternError: an operator's pattern is not a valid glob.
        Anything raised by the callbacks, unchanged.
    """
    options = options or ExpansionOptions()
    if options.brace_expansion:
        text = expand_braces(text)
    if options.tilde_expansion:
        text = expand_tilde(text, callbacks)
    if options.parameter_expansion:
        text = expand_params(text, callbacks)
    if options.quote_removal:
        text = remove_quotes(text)
    return text


class ShellExpander:
    """Expands strings against a variable store it owns.

    Keeps the store between calls, so ${var:=word} assignments are seen
    by later expansions until reset() is called.
    """

    def __init__(
        self,
        *,
        env: Optional[dict[str, str]] = None,
        positional: Optional[list[str]] = None,
        special: Optional[dict[str, str]] = None,
        home_dirs: Optional[dict[str, str]] = None,
        options: Optional[ExpansionOptions] = None,
        callbacks: Optional[ExpansionCallbacks] = None,
    ):
        """Initialize the expander.

        Args:
            env: Initial variables.
            positional: Values of $1, $2, ...
            special: Special parameters keyed without '$' ("?", "0", ...).
            home_dirs: Home directories for ~user, keyed by username.
            options: Which pipeline stages run. Defaults to all of them.
            callbacks: Use these collaborators instead of the built-in store.
        """
        self._options = options or ExpansionOptions()
        self._callbacks = callbacks
        self._initial_store = VariableStore(
            env or {},
            positional=positional,
            special=special,
            home_dirs=home_dirs,
        )
        self._store = self._initial_store.copy()

    @property
    def env(self) -> VariableStore:
        """Get the variable store."""
        return self._store

    @property
    def options(self) -> ExpansionOptions:
        """Get the pipeline options."""
        return self._options

    def expand(self, text: str) -> str:
        """Expand one string. See expand()."""
        callbacks = self._callbacks or self._store.callbacks()
        return expand(text, callbacks, self._options)

    def reset(self) -> None:
        """Reset the variable store to its initial values."""
        self._store = self._initial_store.copy()
