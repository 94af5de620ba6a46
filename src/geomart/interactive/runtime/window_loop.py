# どこで: `src/geomart/interactive/runtime/window_loop.py`。
# 何を: 作品ウィンドウとコントロールパネルを 1 つの `pyglet.app.run()` 上で再描画するランナー。
# なぜ: 生成 tick と再描画を同じ pyglet clock に載せ、片方のウィンドウを閉じたら全体を終えるため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """再描画対象のウィンドウと、その back buffer へ描く関数の組。"""

    window: Any
    draw_frame: Callable[[], None]


class MultiWindowLoop:
    """登録したウィンドウを一定レートで再描画する。

    Notes
    -----
    `draw_frame` は各ウィンドウの `on_draw` として呼ばれ、`flip()` は `Window.draw()` が行う。
    生成 tick はこのループとは別に `pyglet.clock` へ登録されている。
    """

    def __init__(self, tasks: list[WindowTask], *, fps: float) -> None:
        self._tasks = tuple(tasks)
        self._fps = float(fps)

    @property
    def redraw_interval(self) -> float | None:
        """再描画間隔 [s]。`fps <= 0` なら None（毎 clock tick で描く）。"""

        return None if self._fps <= 0 else 1.0 / self._fps

    def _on_window_close(self, *_: object) -> None:
        pyglet.app.exit()

    def _redraw(self, dt: float) -> None:
        open_windows = pyglet.app.windows
        for task in self._tasks:
            if task.window in open_windows:
                task.window.draw(dt)

    def run(self) -> None:
        """どれかのウィンドウが閉じられるまでブロックする。"""

        for task in self._tasks:
            task.window.push_handlers(on_close=self._on_window_close, on_draw=task.draw_frame)

        interval = self.redraw_interval
        if interval is None:
            pyglet.clock.schedule(self._redraw)
        else:
            pyglet.clock.schedule_interval(self._redraw, interval)
        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(self._redraw)


__all__ = ["MultiWindowLoop", "WindowTask"]
