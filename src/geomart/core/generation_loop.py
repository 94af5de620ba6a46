# どこで: `src/geomart/core/generation_loop.py`。
# 何を: セッション実行中に一定間隔で多角形を 1 個ずつ塗る周期タスクを提供する。
# なぜ: 「残り時間の通知 → 期限判定 → 1 個塗る」を 1 tick にまとめ、停止/期限切れを一箇所で扱うため。

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from geomart.core.session import Session, SessionClock, SessionStatus
from geomart.core.shape import paint_random_polygon, sample_polygon
from geomart.core.surface import CanvasSurface
from geomart.core.timer import RepeatingTimer

_logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_MS = 100


class GenerationLoop:
    """多角形生成の周期タスク。

    Notes
    -----
    自身が持つ状態は取消ハンドルだけで、セッション状態はすべて `Session` 側にある。
    取消後に遅れて届いた tick は何も観測/変更しない。
    """

    def __init__(
        self,
        session: Session,
        surface: CanvasSurface,
        timer: RepeatingTimer,
        *,
        now: Callable[[], int],
        rng: np.random.Generator,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        on_remaining: Callable[[int], None] | None = None,
        on_expired: Callable[[], None] | None = None,
    ) -> None:
        if int(interval_ms) <= 0:
            raise ValueError(f"interval_ms は正の値である必要がある: got={interval_ms}")
        self._session = session
        self._clock = SessionClock(session)
        self._surface = surface
        self._timer = timer
        self._now = now
        self._rng = rng
        self._interval_ms = int(interval_ms)
        self._on_remaining = on_remaining
        self._on_expired = on_expired
        self._handle: object | None = None

    @property
    def is_active(self) -> bool:
        """タイマー登録中なら True を返す。"""

        return self._handle is not None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self) -> None:
        """タイマーに登録する（登録済みなら何もしない）。"""

        if self._handle is not None:
            return
        self._handle = self._timer.schedule_repeating(self._interval_ms, self.tick)

    def stop(self) -> None:
        """タイマー登録を取り消す（停止済みなら何もしない）。"""

        handle = self._handle
        self._handle = None
        if handle is not None:
            self._timer.cancel(handle)

    def tick(self) -> None:
        """1 tick 分の処理を行う。"""

        if self._handle is None:
            return

        now = int(self._now())
        remaining = self._clock.remaining_ms(now)
        self._publish_remaining(remaining)

        if self._clock.is_expired(now):
            self.stop()
            self._session.status = SessionStatus.EXPIRED
            self._publish_remaining(0)
            _logger.info("Session expired")
            on_expired = self._on_expired
            if on_expired is not None:
                on_expired()
            return

        surface = self._surface
        center_x, center_y, radius, n_sides = sample_polygon(
            self._rng, surface.width, surface.height
        )
        paint_random_polygon(surface, center_x, center_y, radius, n_sides, rng=self._rng)
        _logger.debug(
            "Painted polygon: sides=%d radius=%.1f remaining_ms=%d", n_sides, radius, remaining
        )

    def _publish_remaining(self, remaining_ms: int) -> None:
        on_remaining = self._on_remaining
        if on_remaining is not None:
            on_remaining(int(remaining_ms))


__all__ = ["DEFAULT_TICK_INTERVAL_MS", "GenerationLoop"]
