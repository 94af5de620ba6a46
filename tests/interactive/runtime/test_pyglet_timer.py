from __future__ import annotations

import pyglet
import pytest

from geomart.interactive.runtime.pyglet_timer import PygletTimer, PygletTimerHandle


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> dict[str, list]:
    calls: dict[str, list] = {"schedule_interval": [], "unschedule": []}

    def schedule_interval(func, interval):
        calls["schedule_interval"].append((func, interval))

    def unschedule(func):
        calls["unschedule"].append(func)

    monkeypatch.setattr(pyglet.clock, "schedule_interval", schedule_interval)
    monkeypatch.setattr(pyglet.clock, "unschedule", unschedule)
    return calls


def test_schedule_repeating_registers_seconds_interval(fake_clock) -> None:
    fired: list[bool] = []
    handle = PygletTimer().schedule_repeating(100, lambda: fired.append(True))

    assert isinstance(handle, PygletTimerHandle)
    [(func, interval)] = fake_clock["schedule_interval"]
    assert interval == pytest.approx(0.1)

    func(0.1)
    assert fired == [True]


def test_cancel_unschedules_once(fake_clock) -> None:
    timer = PygletTimer()
    handle = timer.schedule_repeating(50, lambda: None)

    timer.cancel(handle)
    timer.cancel(handle)

    assert fake_clock["unschedule"] == [handle.func]
    assert handle.cancelled is True


def test_rejects_non_positive_interval_and_foreign_handle(fake_clock) -> None:
    timer = PygletTimer()
    with pytest.raises(ValueError):
        timer.schedule_repeating(0, lambda: None)
    with pytest.raises(TypeError):
        timer.cancel(object())
    assert fake_clock["schedule_interval"] == []
