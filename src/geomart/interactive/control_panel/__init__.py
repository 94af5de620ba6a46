# どこで: `src/geomart/interactive/control_panel/__init__.py`。
# 何を: コントロールパネルの公開 API を集約する。
# なぜ: 実装を責務ごとに分割しつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .gui import ControlPanelGUI
from .pyglet_backend import create_control_panel_window

__all__ = ["ControlPanelGUI", "create_control_panel_window"]
