# どこで: `src/geomart/interactive/draw_window.py`。
# 何を: 作品表示用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core/export をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.window import Window

from geomart.interactive.render_settings import RenderSettings


def create_art_window(settings: RenderSettings, *, caption: str = "Geometric Art Generator") -> Window:
    """設定に基づき作品ウィンドウを生成する。"""

    w, h = settings.window_size
    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(w),
        height=int(h),
        resizable=False,
        caption=str(caption),
    )


__all__ = ["create_art_window"]
