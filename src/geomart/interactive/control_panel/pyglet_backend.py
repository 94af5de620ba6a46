# どこで: `src/geomart/interactive/control_panel/pyglet_backend.py`。
# 何を: コントロールパネル用の pyglet window 生成と、imgui renderer / IO の橋渡しを行う。
# なぜ: ControlPanelGUI のフレーム処理から pyglet 固有の扱いを切り離すため。

from __future__ import annotations

from typing import Any

PANEL_CAPTION = "Controls"
# ImGui は dt=0 を受け付けないため、最初のフレームなどはこの値に切り上げる。
_MIN_DELTA_TIME = 1e-4


def _create_imgui_pyglet_renderer(imgui_pyglet_mod: Any, gui_window: Any) -> Any:
    """`imgui.integrations.pyglet.create_renderer` で window 用 renderer を作る。"""

    create_renderer = getattr(imgui_pyglet_mod, "create_renderer", None)
    if not callable(create_renderer):
        raise RuntimeError("imgui.integrations.pyglet に create_renderer がない")
    return create_renderer(gui_window)


def _framebuffer_scale(gui_window: Any) -> tuple[float, float]:
    """論理サイズに対する framebuffer の倍率（Retina で 2.0）を返す。"""

    fb_w, fb_h = gui_window.get_framebuffer_size()
    return (
        float(fb_w) / float(max(1, gui_window.width)),
        float(fb_h) / float(max(1, gui_window.height)),
    )


def _sync_imgui_io_for_window(imgui_mod: Any, gui_window: Any, *, dt: float) -> None:
    """ImGui の IO（Δt / 表示サイズ / framebuffer 倍率）を window に合わせる。"""

    io = imgui_mod.get_io()
    io.delta_time = max(float(dt), _MIN_DELTA_TIME)
    io.display_size = (float(gui_window.width), float(gui_window.height))
    io.display_fb_scale = _framebuffer_scale(gui_window)


def create_control_panel_window(*, width: int, height: int, vsync: bool = False) -> Any:
    """固定サイズのコントロールパネル window を生成する。"""

    import pyglet

    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        caption=PANEL_CAPTION,
        resizable=False,
        vsync=bool(vsync),
    )


__all__ = ["PANEL_CAPTION", "create_control_panel_window"]
