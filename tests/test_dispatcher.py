"""Tests for chroma_wheel.wheel.dispatcher."""

import dataclasses
import logging

import pytest

from chroma_wheel.wheel import (
    ActiveHexMessage,
    Dispatcher,
    GesturePhase,
    PaletteMessage,
)


def _palette(*colors):
    return PaletteMessage(tuple(colors), GesturePhase.SET)


class TestDirect:

    def test_delivers_by_type(self):
        dispatcher = Dispatcher()
        palettes, hexes = [], []
        dispatcher.subscribe(PaletteMessage, palettes.append)
        dispatcher.subscribe(ActiveHexMessage, hexes.append)

        dispatcher.post(_palette("#FF0000"))
        dispatcher.post(ActiveHexMessage("#FF0000"))

        assert palettes == [_palette("#FF0000")]
        assert hexes == [ActiveHexMessage("#FF0000")]

    def test_no_subscriber_is_noop(self):
        Dispatcher().post(_palette("#FF0000"))

    def test_unsubscribe(self):
        dispatcher = Dispatcher()
        received = []
        dispatcher.subscribe(PaletteMessage, received.append)
        dispatcher.unsubscribe(PaletteMessage, received.append)
        dispatcher.post(_palette("#FF0000"))
        assert received == []

    def test_failing_subscriber_is_isolated(self, caplog):
        dispatcher = Dispatcher()
        received = []

        def boom(message):
            raise RuntimeError("consumer bug")

        dispatcher.subscribe(PaletteMessage, boom)
        dispatcher.subscribe(PaletteMessage, received.append)

        with caplog.at_level(logging.ERROR, logger="chroma_wheel.wheel.dispatcher"):
            dispatcher.post(_palette("#FF0000"))

        assert received == [_palette("#FF0000")]
        assert "Subscriber failed" in caplog.text

    def test_messages_are_frozen(self):
        message = _palette("#FF0000")
        with pytest.raises(dataclasses.FrozenInstanceError):
            message.colors = ("#000000",)


class TestQueued:

    def test_delivery_waits_for_drain(self):
        dispatcher = Dispatcher(queued=True)
        received = []
        dispatcher.subscribe(PaletteMessage, received.append)

        dispatcher.post(_palette("#000001"))
        dispatcher.post(_palette("#000002"))
        assert received == []
        assert dispatcher.pending == 2

        assert dispatcher.drain() == 2
        assert received == [_palette("#000001"), _palette("#000002")]

    def test_drain_limit(self):
        dispatcher = Dispatcher(queued=True)
        for i in range(3):
            dispatcher.post(_palette(f"#00000{i}"))
        assert dispatcher.drain(max_messages=2) == 2
        assert dispatcher.pending == 1

    def test_close_drops_queue(self):
        dispatcher = Dispatcher(queued=True)
        received = []
        dispatcher.subscribe(PaletteMessage, received.append)
        dispatcher.post(_palette("#000001"))
        dispatcher.close()
        dispatcher.post(_palette("#000002"))

        assert dispatcher.drain() == 0
        assert received == []
