"""
test_events.py — Tests for the event emitter

Tests cover:
- Handler registration and dispatch order
- Synthesized Event objects
- off() in its three forms
- Exceptions and re-entrant registration during dispatch
- Observable delegation, including listeners()
"""

import logging
from datetime import datetime, timezone

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from currency import Event, EventEmitter, Observable, money


# ==============================================================================
# Dispatch
# ==============================================================================

class TestTrigger:
    """Tests for on() and trigger()."""

    def test_handlers_run_in_registration_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("x", lambda event: calls.append(("first", event.type)))
        emitter.on("x", lambda event: calls.append(("second", event.type)))

        emitter.trigger("x")

        assert calls == [("first", "x"), ("second", "x")]

    def test_event_is_first_argument(self):
        emitter = EventEmitter()
        received = []
        emitter.on("paid", lambda *args: received.append(args))

        emitter.trigger("paid", money(5), "note")

        event, amount, note = received[0]
        assert isinstance(event, Event)
        assert event.type == "paid"
        assert isinstance(event.time_stamp, datetime)
        assert event.time_stamp.tzinfo == timezone.utc
        assert amount == money(5)
        assert note == "note"

    def test_trigger_with_event_instance(self):
        emitter = EventEmitter()
        received = []
        emitter.on("x", received.append)
        event = Event("x")

        emitter.trigger(event)

        assert received == [event]

    def test_only_matching_type_runs(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("x", lambda event: calls.append("x"))
        emitter.on("y", lambda event: calls.append("y"))

        emitter.trigger("y")

        assert calls == ["y"]

    def test_unknown_type_is_noop(self):
        emitter = EventEmitter()
        assert emitter.trigger("nothing") is emitter

    def test_chaining(self):
        emitter = EventEmitter()
        handler = lambda event: None
        assert emitter.on("x", handler).on("y", handler) is emitter
        assert emitter.listeners("x") == [handler]

    def test_on_rejects_non_callable(self):
        with pytest.raises(TypeError):
            EventEmitter().on("x", "not callable")

    def test_trigger_rejects_bad_event(self):
        with pytest.raises(TypeError):
            EventEmitter().trigger(123)

    def test_dispatch_is_logged(self, caplog):
        emitter = EventEmitter().on("x", lambda event: None)
        with caplog.at_level(logging.DEBUG, logger="currency.events"):
            emitter.trigger("x")
        assert "Dispatching 'x' to 1 handler(s)" in caplog.text


class TestDispatchEdgeCases:

    def test_handler_exception_propagates(self):
        emitter = EventEmitter()
        calls = []

        def boom(event):
            raise RuntimeError("boom")

        emitter.on("x", boom)
        emitter.on("x", lambda event: calls.append("after"))

        with pytest.raises(RuntimeError):
            emitter.trigger("x")
        assert calls == []

    def test_removal_during_dispatch_applies_next_time(self):
        emitter = EventEmitter()
        calls = []

        def once(event):
            calls.append("once")
            emitter.off("x", once)

        emitter.on("x", once)
        emitter.on("x", lambda event: calls.append("always"))

        emitter.trigger("x")
        emitter.trigger("x")

        assert calls == ["once", "always", "always"]

    def test_listeners_returns_copy(self):
        emitter = EventEmitter()
        emitter.listeners("x").append(print)
        assert emitter.listeners("x") == []


# ==============================================================================
# off()
# ==============================================================================

class TestOff:
    """Tests for off() in its three forms."""

    def test_off_handler_removes_first_registration(self):
        emitter = EventEmitter()
        calls = []
        handler = lambda event: calls.append(1)
        emitter.on("x", handler).on("x", handler)

        emitter.off("x", handler)
        emitter.trigger("x")

        assert calls == [1]

    def test_off_type(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("x", lambda event: calls.append("x"))
        emitter.on("y", lambda event: calls.append("y"))

        emitter.off("x")
        emitter.trigger("x").trigger("y")

        assert calls == ["y"]

    def test_off_all(self):
        emitter = EventEmitter()
        calls = []
        emitter.on("x", lambda event: calls.append("x"))
        emitter.on("y", lambda event: calls.append("y"))

        emitter.off()
        emitter.trigger("x").trigger("y")

        assert calls == []

    def test_off_unknown_is_noop(self):
        emitter = EventEmitter()
        assert emitter.off("x") is emitter
        assert emitter.off("x", print) is emitter


# ==============================================================================
# Observable
# ==============================================================================

class Wallet(Observable):

    def __init__(self):
        super().__init__()
        self.balance = money(0)

    def deposit(self, amount):
        self.balance = self.balance.add(amount)
        self.trigger("deposit", self.balance)


class TestObservable:
    """Tests for delegation through an owned emitter."""

    def test_delegates_to_owned_emitter(self):
        wallet = Wallet()
        balances = []
        wallet.on("deposit", lambda event, balance: balances.append(str(balance)))

        wallet.deposit(0.1)
        wallet.deposit(0.2)

        assert balances == ["0.10", "0.30"]

    def test_instances_do_not_share_handlers(self):
        first, second = Wallet(), Wallet()
        calls = []
        first.on("deposit", lambda event, balance: calls.append("first"))

        second.deposit(1)

        assert calls == []

    def test_methods_chain_on_target(self):
        wallet = Wallet()
        handler = lambda event, balance: None
        assert wallet.on("deposit", handler).off("deposit", handler) is wallet
        assert wallet.off() is wallet

    def test_listeners_delegate_to_owned_emitter(self):
        wallet = Wallet()
        first = lambda event, balance: None
        second = lambda event, balance: None
        wallet.on("deposit", first).on("deposit", second)

        assert wallet.listeners("deposit") == [first, second]
        assert wallet.listeners("withdraw") == []

        wallet.listeners("deposit").clear()
        assert len(wallet.listeners("deposit")) == 2
