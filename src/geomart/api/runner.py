"""
どこで: `src/geomart/api/runner.py`。公開 API のランナー実装。
何を: 作品ウィンドウ（+ コントロールパネル）を組み立て、pyglet の app loop で生成セッションを回す。
なぜ: `main.py` を実行するだけで、時間指定のランダム多角形アートを作って保存できる経路を用意するため。
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np

from geomart.core.color import parse_hex_color, require_rgb255
from geomart.core.runtime_config import runtime_config, set_config_path
from geomart.interactive.render_settings import RenderSettings
from geomart.interactive.runtime.art_window_system import ArtWindowSystem
from geomart.interactive.runtime.window_loop import MultiWindowLoop, WindowTask


def run(
    *,
    duration_minutes: int | None = None,
    background_color: str | tuple[int, int, int] | None = None,
    fill_shapes: bool | None = None,
    canvas_size: tuple[int, int] | None = None,
    control_panel: bool | None = None,
    autostart: bool = False,
    seed: int | None = None,
    config_path: str | Path | None = None,
) -> None:
    """pyglet ウィンドウを生成し、ランダム多角形の生成セッションを実行する。

    Parameters
    ----------
    duration_minutes : int | None
        セッション長 [分]（1..360）。None なら config.yaml の `art.duration_minutes`。
    background_color : str | tuple[int, int, int] | None
        背景色。`"#rrggbb"` または RGB255。None なら `art.background_color`。
    fill_shapes : bool | None
        UI に表示する塗りフラグ（生成には影響しない）。None なら `art.fill_shapes`。
    canvas_size : tuple[int, int] | None
        キャンバス寸法 [px]。None なら `art.canvas_size`。
    control_panel : bool | None
        True の場合、別ウィンドウで pyimgui のコントロールパネルを開く。None なら `ui.control_panel`。
    autostart : bool
        True の場合、ウィンドウ表示と同時にセッションを開始する。
    seed : int | None
        乱数シード。None なら毎回異なる作品になる。
    config_path : str | Path | None
        明示的に読む config.yaml。既定の探索結果より優先される。

    Returns
    -------
    None
        どちらかのウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    art = cfg.art_config()
    if duration_minutes is not None:
        art = art.with_duration_minutes(int(duration_minutes))
    if background_color is not None:
        rgb = (
            parse_hex_color(background_color)
            if isinstance(background_color, str)
            else require_rgb255(background_color)
        )
        art = art.with_background_color(rgb)
    if fill_shapes is not None:
        art = art.with_fill_shapes(bool(fill_shapes))

    settings = RenderSettings(
        canvas_size=canvas_size if canvas_size is not None else cfg.canvas_size,
        tick_interval_ms=cfg.tick_interval_ms,
        pause_extends_deadline=cfg.pause_extends_deadline,
        preview_scale=cfg.preview_scale,
    )

    # --- サブシステムの組み立て ---
    art_window = ArtWindowSystem(
        settings=settings,
        config=art,
        rng=np.random.default_rng(seed),
    )
    art_window.window.set_location(*cfg.window_pos_art)

    # `closers` は teardown 用（close 順もここで管理する）。
    closers: list[Callable[[], None]] = [art_window.close]
    tasks = [WindowTask(window=art_window.window, draw_frame=art_window.draw_frame)]

    use_control_panel = cfg.control_panel if control_panel is None else bool(control_panel)
    if use_control_panel:
        # pyimgui は依存が重いので、使うときだけ遅延 import する。
        from geomart.interactive.runtime.control_panel_system import (
            ControlPanelWindowSystem,
        )

        panel = ControlPanelWindowSystem(
            controller=art_window.controller,
            download=art_window.save_png,
        )
        panel.window.set_location(*cfg.window_pos_control_panel)
        closers.append(panel.close)
        tasks.append(WindowTask(window=panel.window, draw_frame=panel.draw_frame))

    if autostart:
        art_window.controller.start()

    loop = MultiWindowLoop(tasks, fps=settings.fps)
    try:
        loop.run()
    finally:
        # 作成順の逆で閉じる（パネル → 作品ウィンドウ）。
        for close in reversed(closers):
            close()


__all__ = ["run"]
