# どこで: `src/geomart/core/timer.py`。
# 何を: 周期タイマー（登録/取消）のインターフェースを定義する。
# なぜ: 生成ループを pyglet の clock から切り離し、手動タイマーで決定的にテストできるようにするため。

from __future__ import annotations

from typing import Callable, Protocol


class RepeatingTimer(Protocol):
    """一定間隔でコールバックを呼ぶタイマー。"""

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> object:
        """`interval_ms` ごとに `callback()` を呼ぶよう登録し、取消用ハンドルを返す。"""
        ...

    def cancel(self, handle: object) -> None:
        """登録を取り消す。取消済みハンドルに対しては何もしない。"""
        ...


__all__ = ["RepeatingTimer"]
