"""Tests for tilde expansion."""

import pytest

from shellexpand.expansion import expand_tilde
from shellexpand.types import ExpansionCallbacks, VariableStore


@pytest.fixture
def callbacks():
    store = VariableStore(
        {"HOME": "/home/stuart", "PWD": "/tmp", "OLDPWD": "/var/tmp"},
        home_dirs={"root": "/root"},
    )
    return store.callbacks()


class TestTildePrefixes:
    def test_home(self, callbacks):
        assert expand_tilde("~/path/to/folder", callbacks) == "/home/stuart/path/to/folder"

    def test_bare_tilde(self, callbacks):
        assert expand_tilde("~", callbacks) == "/home/stuart"

    def test_pwd(self, callbacks):
        assert expand_tilde("~+/path/to/folder", callbacks) == "/tmp/path/to/folder"

    def test_oldpwd(self, callbacks):
        assert expand_tilde("~-/path/to/folder", callbacks) == "/var/tmp/path/to/folder"

    def test_username(self, callbacks):
        assert expand_tilde("~root/path/to/folder", callbacks) == "/root/path/to/folder"

    def test_every_word(self, callbacks):
        assert expand_tilde("~/a ~+/b", callbacks) == "/home/stuart/a /tmp/b"


class TestTildeLeftAlone:
    """Prefixes that cannot be expanded are kept verbatim."""

    def test_unknown_user(self, callbacks):
        assert expand_tilde("~nobody/path", callbacks) == "~nobody/path"

    def test_unset_home(self):
        callbacks = ExpansionCallbacks(lookup_var=lambda name: ("", False))
        assert expand_tilde("~/path", callbacks) == "~/path"

    def test_no_home_dir_callback(self):
        callbacks = ExpansionCallbacks(lookup_var=lambda name: ("", False))
        assert expand_tilde("~root", callbacks) == "~root"

    def test_directory_stack(self, callbacks):
        assert expand_tilde("~+1/path", callbacks) == "~+1/path"

    def test_not_at_word_start(self, callbacks):
        assert expand_tilde("a~/path", callbacks) == "a~/path"

    def test_escaped_tilde(self, callbacks):
        assert expand_tilde("\\~/path", callbacks) == "\\~/path"

    def test_inside_variable_token(self, callbacks):
        assert expand_tilde("${VAR1:~VAR2}", callbacks) == "${VAR1:~VAR2}"

    def test_escaped_slash_in_prefix(self, callbacks):
        assert expand_tilde("~\\/path/to/folder", callbacks) == "~\\/path/to/folder"
