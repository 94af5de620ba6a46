# どこで: `src/geomart/interactive/runtime/pyglet_timer.py`。
# 何を: `RepeatingTimer` を pyglet の clock（schedule_interval / unschedule）で実装する。
# なぜ: 生成 tick を描画ループと同じ pyglet の app loop 上で回し、スレッドを増やさないため。

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import pyglet


@dataclass(slots=True)
class PygletTimerHandle:
    """pyglet.clock への登録 1 件。"""

    interval_ms: int
    func: Callable[[float], None]
    cancelled: bool = field(default=False)


class PygletTimer:
    """pyglet.clock ベースの周期タイマー。"""

    def schedule_repeating(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> PygletTimerHandle:
        """`interval_ms` ごとに `callback()` を呼ぶよう登録する。"""

        ms = int(interval_ms)
        if ms <= 0:
            raise ValueError(f"interval_ms は正の値である必要がある: got={interval_ms}")

        # pyglet は経過秒 dt を渡してくるが、tick 側は時刻を自前で読むので捨てる。
        def fire(dt: float) -> None:
            callback()

        pyglet.clock.schedule_interval(fire, ms / 1000.0)
        return PygletTimerHandle(interval_ms=ms, func=fire)

    def cancel(self, handle: object) -> None:
        """登録を取り消す（取消済みなら何もしない）。"""

        if not isinstance(handle, PygletTimerHandle):
            raise TypeError(f"PygletTimer のハンドルではない: {handle!r}")
        if handle.cancelled:
            return
        handle.cancelled = True
        pyglet.clock.unschedule(handle.func)


__all__ = ["PygletTimer", "PygletTimerHandle"]
