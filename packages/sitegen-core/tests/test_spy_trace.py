import logging

import pytest
from sitegen_core.codebase.debug import spy_enabled, spy_trace
from sitegen_core.errors import UnknownSwitchTypeError
from sitegen_core.naming.rules import effective_class


@pytest.mark.parametrize("value,enabled", [("1", True), ("yes", True), ("0", False), ("off", False), ("", False)])
def test_spy_switch(monkeypatch, value, enabled):
    monkeypatch.setenv("SITEGEN_SPY", value)
    assert spy_enabled() is enabled


def test_silent_when_disabled(monkeypatch, caplog):
    monkeypatch.delenv("SITEGEN_SPY", raising=False)
    with caplog.at_level(logging.DEBUG, logger="sitegen.spy"):
        effective_class("LeafBMC", "x3000c0w14")
    assert not [r for r in caplog.records if r.name == "sitegen.spy"]


def test_traces_entry_and_exit(monkeypatch, caplog):
    monkeypatch.setenv("SITEGEN_SPY", "1")
    with caplog.at_level(logging.DEBUG, logger="sitegen.spy"):
        effective_class("LeafBMC", "x3000c0w14")
    messages = [r.getMessage() for r in caplog.records if r.name == "sitegen.spy"]
    assert messages[0].startswith("-> effective_class")
    assert messages[-1].startswith("<- effective_class in ")


def test_traces_exceptions_and_reraises(monkeypatch, caplog):
    monkeypatch.setenv("SITEGEN_SPY", "1")
    with caplog.at_level(logging.DEBUG, logger="sitegen.spy"):
        with pytest.raises(UnknownSwitchTypeError):
            effective_class("Router", "x3000c0w14")
    assert any("raised UnknownSwitchTypeError" in r.getMessage() for r in caplog.records)


def test_wrapped_function_keeps_its_name():
    @spy_trace
    def carve():
        """Carve."""

    assert carve.__name__ == "carve"
    assert carve.__doc__ == "Carve."
