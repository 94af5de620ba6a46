# どこで: `src/geomart/interactive/control_panel/gui.py`。
# 何を: SessionController を pyimgui で操作するコントロールパネル（初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重いライフサイクル管理を 1 箇所に閉じ込め、他モジュールを純粋に保つため。

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from geomart.core.session import SessionStatus
from geomart.core.session_controller import SessionController

from .pyglet_backend import _create_imgui_pyglet_renderer, _sync_imgui_io_for_window
from .widgets import (
    PanelActions,
    apply_actions,
    render_complete_popup,
    render_session_buttons,
    render_settings_widgets,
)


class ControlPanelGUI:
    """pyimgui でセッションを操作するための最小 GUI。

    `draw_frame()` を呼ぶことで 1 フレーム分の UI を描画する。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        controller: SessionController,
        download: Callable[[], object],
        title: str = "Geometric Art Generator",
    ) -> None:
        """GUI の初期化（ImGui コンテキスト / renderer 作成）。"""

        import imgui  # type: ignore[import-untyped]

        # imgui の pyglet backend は環境によって import 経路が揺れるため、明示的にここで解決する。
        try:
            from imgui.integrations import (
                pyglet as imgui_pyglet,  # type: ignore[import-untyped]
            )
        except Exception as exc:
            raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

        self._window = gui_window
        self._controller = controller
        self._download = download
        self._title = str(title)

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.set_current_context(self._context)
        imgui.style_colors_light()

        self._renderer = _create_imgui_pyglet_renderer(imgui_pyglet, gui_window)

        self._prev_time = time.monotonic()
        # EXPIRED に入ったフレームで 1 回だけ完了モーダルを開く。
        self._last_status = controller.status
        self._closed = False

    def draw_frame(self) -> bool:
        """1 フレーム分の GUI を描画し、操作があれば controller に反映する。

        `flip()` は呼ばない。呼び出し側が担当する。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        imgui.set_current_context(self._context)

        # 注: imgui.integrations.pyglet の process_inputs() は内部で pyglet.clock.tick() を呼ぶ。
        # `pyglet.app.run()` 駆動時にこれを呼ぶと clock が二重に進み、生成 tick も早まるので呼ばない。

        imgui.new_frame()
        _sync_imgui_io_for_window(imgui, self._window, dt=dt)

        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE
            | imgui.WINDOW_NO_COLLAPSE
            | imgui.WINDOW_NO_MOVE,
        )

        snap = self._controller.snapshot()
        became_expired = (
            snap.status is SessionStatus.EXPIRED and self._last_status is not SessionStatus.EXPIRED
        )
        self._last_status = snap.status

        actions = PanelActions()
        try:
            render_settings_widgets(imgui, snap, actions)
            imgui.separator()
            render_session_buttons(imgui, snap, actions)
            render_complete_popup(imgui, snap, actions, request_open=became_expired)
        finally:
            imgui.end()

        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(0.94, 0.94, 0.94, 1.0)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())

        # 描画後に反映する（このフレームの snapshot と矛盾しないようにする）。
        if actions.any:
            apply_actions(self._controller, actions, download=self._download)
        return actions.any

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        # 二重 close を許容する（呼び出し側の finally から安全に呼べるようにする）。
        if self._closed:
            return
        self._closed = True

        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()


__all__ = ["ControlPanelGUI"]
