# どこで: `src/geomart/interactive/runtime/control_panel_system.py`。
# 何を: コントロールパネルを「1フレーム描画できるサブシステム」として提供する。
# なぜ: `src/geomart/api/runner.py` の `run()` から GUI 初期化/描画/後始末を分離し、肥大化を防ぐため。

from __future__ import annotations

from collections.abc import Callable

from geomart.core.runtime_config import runtime_config
from geomart.core.session_controller import SessionController
from geomart.interactive.control_panel import ControlPanelGUI, create_control_panel_window


class ControlPanelWindowSystem:
    """コントロールパネル（別ウィンドウ）のサブシステム。"""

    def __init__(
        self,
        *,
        controller: SessionController,
        download: Callable[[], object],
    ) -> None:
        """GUI 用の window と ControlPanelGUI を初期化する。"""

        w, h = runtime_config().control_panel_window_size
        self.window = create_control_panel_window(width=w, height=h, vsync=False)
        self._gui = ControlPanelGUI(self.window, controller=controller, download=download)

    def draw_frame(self) -> None:
        """1 フレーム分の GUI を描画する（`flip()` は呼ばない）。"""

        self._gui.draw_frame()

    def close(self) -> None:
        """GUI を終了し、ウィンドウを破棄する。"""

        self._gui.close()


__all__ = ["ControlPanelWindowSystem"]
