"""コントロールパネルのウィジェット描画と操作反映のテスト群（fake imgui を使う）。"""

from __future__ import annotations

import numpy as np

from geomart.core.art_config import ArtConfig
from geomart.core.session import SessionStatus
from geomart.core.session_controller import SessionController, SessionSnapshot
from geomart.core.surface import CanvasSurface
from geomart.interactive.control_panel.widgets import (
    COMPLETE_POPUP_ID,
    PanelActions,
    apply_actions,
    render_complete_popup,
    render_session_buttons,
    render_settings_widgets,
)


class _FakeImgui:
    WINDOW_ALWAYS_AUTO_RESIZE = 64

    def __init__(self, *, clicked: tuple[str, ...] = (), popup_open: bool = False) -> None:
        self.clicked = set(clicked)
        self.popup_open = popup_open
        self.texts: list[str] = []
        self.buttons: list[str] = []
        self.calls: list[str] = []
        self.slider_result: tuple[bool, int] | None = None
        self.color_result: tuple[bool, tuple[float, float, float]] | None = None
        self.checkbox_result: tuple[bool, bool] | None = None

    def text(self, value: str) -> None:
        self.texts.append(value)

    def slider_int(self, label: str, value: int, lo: int, hi: int):
        self.calls.append(f"slider_int:{label}:{lo}:{hi}")
        return self.slider_result or (False, value)

    def color_edit3(self, label: str, r: float, g: float, b: float):
        self.calls.append(f"color_edit3:{label}")
        return self.color_result or (False, (r, g, b))

    def checkbox(self, label: str, state: bool):
        self.calls.append(f"checkbox:{label}")
        return self.checkbox_result or (False, state)

    def button(self, label: str) -> bool:
        self.buttons.append(label)
        return label in self.clicked

    def same_line(self) -> None:
        pass

    def separator(self) -> None:
        pass

    def open_popup(self, name: str) -> None:
        self.calls.append(f"open_popup:{name}")
        self.popup_open = True

    def begin_popup_modal(self, name: str, flags: int = 0):
        self.calls.append(f"begin_popup_modal:{name}:{flags}")
        return self.popup_open, True

    def close_current_popup(self) -> None:
        self.calls.append("close_current_popup")
        self.popup_open = False

    def end_popup(self) -> None:
        self.calls.append("end_popup")


class _NullTimer:
    def __init__(self) -> None:
        self.handles: list[object] = []

    def schedule_repeating(self, interval_ms, callback):
        handle = object()
        self.handles.append(handle)
        return handle

    def cancel(self, handle) -> None:
        self.handles.remove(handle)


def _snap(status: SessionStatus = SessionStatus.IDLE, remaining_ms: int = 3_600_000) -> SessionSnapshot:
    return SessionSnapshot(
        status=status,
        remaining_ms=remaining_ms,
        duration_minutes=60,
        background_color=(255, 255, 255),
        fill_shapes=True,
        started_at_ms=None,
        end_at_ms=None,
    )


def _controller() -> SessionController:
    return SessionController(
        CanvasSurface((40, 20)),
        _NullTimer(),
        config=ArtConfig(duration_minutes=1),
        now=lambda: 0,
        rng=np.random.default_rng(0),
    )


def test_settings_widgets_without_interaction_request_nothing() -> None:
    imgui = _FakeImgui()
    actions = PanelActions()

    render_settings_widgets(imgui, _snap(), actions)

    assert actions.any is False
    assert imgui.texts == ["Duration (minutes): 60"]
    assert "slider_int:##duration:1:360" in imgui.calls
    assert "color_edit3:Background Color" in imgui.calls
    assert "checkbox:Fill Shapes" in imgui.calls


def test_settings_widgets_collect_changes() -> None:
    imgui = _FakeImgui()
    imgui.slider_result = (True, 15)
    imgui.color_result = (True, (0.0, 0.5, 1.0))
    imgui.checkbox_result = (True, False)
    actions = PanelActions()

    render_settings_widgets(imgui, _snap(), actions)

    assert actions.duration_minutes == 15
    assert actions.background_color == (0, 128, 255)
    assert actions.fill_shapes is False


def test_session_buttons_label_and_remaining_text() -> None:
    idle = _FakeImgui()
    render_session_buttons(idle, _snap(), PanelActions())
    assert idle.buttons == ["Start", "Restart", "Download Artwork"]
    assert idle.texts[-1] == "Remaining Time: 60:00"

    running = _FakeImgui(clicked=("Pause",))
    actions = PanelActions()
    render_session_buttons(running, _snap(SessionStatus.RUNNING, 65_000), actions)
    assert running.buttons[0] == "Pause"
    assert running.texts[-1] == "Remaining Time: 1:05"
    assert actions.toggle is True


def test_complete_popup_opens_on_request_and_collects_download() -> None:
    imgui = _FakeImgui(clicked=("Download",))
    actions = PanelActions()

    render_complete_popup(imgui, _snap(SessionStatus.EXPIRED, 0), actions, request_open=True)

    assert imgui.calls[0] == f"open_popup:{COMPLETE_POPUP_ID}"
    assert imgui.calls[-1] == "end_popup"
    assert actions.download is True
    assert imgui.popup_open is True


def test_complete_popup_restart_closes_popup() -> None:
    imgui = _FakeImgui(clicked=("Restart",), popup_open=True)
    actions = PanelActions()

    render_complete_popup(imgui, _snap(SessionStatus.EXPIRED, 0), actions, request_open=False)

    assert actions.restart is True
    assert "close_current_popup" in imgui.calls


def test_complete_popup_not_open_draws_nothing() -> None:
    imgui = _FakeImgui()

    render_complete_popup(imgui, _snap(SessionStatus.EXPIRED, 0), PanelActions(), request_open=False)

    assert imgui.texts == []
    assert "end_popup" not in imgui.calls


def test_apply_actions_updates_settings_before_restart() -> None:
    controller = _controller()
    downloads: list[bool] = []
    actions = PanelActions(background_color=(1, 2, 3), restart=True, download=True)

    apply_actions(controller, actions, download=lambda: downloads.append(True))

    assert controller.status is SessionStatus.RUNNING
    assert controller.surface.pixel(0, 0) == (1, 2, 3)
    assert downloads == [True]


def test_apply_actions_toggle_and_duration() -> None:
    controller = _controller()

    apply_actions(controller, PanelActions(duration_minutes=5), download=lambda: None)
    assert controller.remaining_ms() == 300_000

    apply_actions(controller, PanelActions(toggle=True), download=lambda: None)
    assert controller.status is SessionStatus.RUNNING
    apply_actions(controller, PanelActions(toggle=True), download=lambda: None)
    assert controller.status is SessionStatus.PAUSED
