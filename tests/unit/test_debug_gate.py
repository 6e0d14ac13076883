"""Unit test for debug.maybe_reraise behavior."""

from __future__ import annotations

import pytest

from swift_refactor import debug


def test_maybe_reraise_no_debug(monkeypatch):
    monkeypatch.delenv(debug.DEBUG_ENV_VAR, raising=False)
    # Should not raise
    debug.maybe_reraise(ValueError("no debug"))


@pytest.mark.parametrize("value", ["1", "true", "True"])
def test_maybe_reraise_with_debug(monkeypatch, value):
    monkeypatch.setenv(debug.DEBUG_ENV_VAR, value)
    with pytest.raises(ValueError):
        debug.maybe_reraise(ValueError("debug"))


def test_other_values_do_not_enable_debug(monkeypatch):
    monkeypatch.setenv(debug.DEBUG_ENV_VAR, "yes")
    assert not debug.get_refactor_debug()
