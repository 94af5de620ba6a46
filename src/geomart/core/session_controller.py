"""
どこで: `src/geomart/core/session_controller.py`。
何を: セッションの状態遷移（IDLE → RUNNING ⇄ PAUSED → EXPIRED、restart）を司るコントローラを提供する。
なぜ: UI（キー入力/GUI ボタン）からの操作と生成ループからの期限切れ通知を、1 つの状態機械に集約するため。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from geomart.core.art_config import ArtConfig
from geomart.core.color import rgb255_to_hex
from geomart.core.generation_loop import DEFAULT_TICK_INTERVAL_MS, GenerationLoop
from geomart.core.session import Session, SessionClock, SessionStatus, wall_clock_ms
from geomart.core.surface import CanvasSurface
from geomart.core.timer import RepeatingTimer

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """UI 表示用のセッション状態（不変）。"""

    status: SessionStatus
    remaining_ms: int
    duration_minutes: int
    background_color: tuple[int, int, int]
    fill_shapes: bool
    started_at_ms: int | None
    end_at_ms: int | None

    @property
    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    @property
    def is_expired(self) -> bool:
        return self.status is SessionStatus.EXPIRED


class SessionController:
    """セッションの状態機械。

    Notes
    -----
    状態の変更はこのクラスのメソッド経由でのみ行う。
    どの (状態, 操作) の組み合わせでも例外にはならない（該当しない操作は no-op）。

    `pause_extends_deadline=False`（既定）では、一時停止中も期限は実時間で進む。
    True の場合、再開時に一時停止していた時間だけ期限を後ろへずらす。
    """

    def __init__(
        self,
        surface: CanvasSurface,
        timer: RepeatingTimer,
        *,
        config: ArtConfig | None = None,
        now: Callable[[], int] = wall_clock_ms,
        rng: np.random.Generator | None = None,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        pause_extends_deadline: bool = False,
        on_remaining: Callable[[int], None] | None = None,
        on_state_change: Callable[[SessionSnapshot], None] | None = None,
        on_complete: Callable[[SessionSnapshot], None] | None = None,
    ) -> None:
        self._config = config if config is not None else ArtConfig()
        self._surface = surface
        self._now = now
        self._pause_extends_deadline = bool(pause_extends_deadline)
        self._on_remaining = on_remaining
        self._on_state_change = on_state_change
        self._on_complete = on_complete

        self._session = Session(duration_ms=self._config.duration_ms)
        self._clock = SessionClock(self._session)
        self._remaining_ms = self._session.duration_ms
        self._loop = GenerationLoop(
            self._session,
            surface,
            timer,
            now=now,
            rng=rng if rng is not None else np.random.default_rng(),
            interval_ms=int(interval_ms),
            on_remaining=self._publish_remaining,
            on_expired=self._handle_expired,
        )

    # ----- 参照 -----
    @property
    def config(self) -> ArtConfig:
        return self._config

    @property
    def session(self) -> Session:
        return self._session

    @property
    def status(self) -> SessionStatus:
        return self._session.status

    @property
    def surface(self) -> CanvasSurface:
        return self._surface

    @property
    def clock(self) -> SessionClock:
        return self._clock

    @property
    def is_generating(self) -> bool:
        """生成ループがタイマー登録中なら True を返す。"""

        return self._loop.is_active

    def remaining_ms(self) -> int:
        """最後に通知した残り時間 [ms] を返す。"""

        return int(self._remaining_ms)

    def snapshot(self) -> SessionSnapshot:
        session = self._session
        config = self._config
        return SessionSnapshot(
            status=session.status,
            remaining_ms=int(self._remaining_ms),
            duration_minutes=config.duration_minutes,
            background_color=config.background_color,
            fill_shapes=config.fill_shapes,
            started_at_ms=session.started_at_ms,
            end_at_ms=session.end_at_ms,
        )

    # ----- 操作 -----
    def toggle(self) -> None:
        """Start/Pause ボタン相当。実行中なら一時停止、それ以外なら開始/再開する。"""

        if self._session.status is SessionStatus.RUNNING:
            self.pause()
        else:
            self.start()

    def start(self) -> None:
        """開始（IDLE）または再開（PAUSED）する。"""

        session = self._session
        status = session.status
        if status is SessionStatus.IDLE:
            now = int(self._now())
            if not session.is_started:
                self._surface.clear(self._config.background_color)
                session.begin(now)
            session.status = SessionStatus.RUNNING
            self._loop.start()
            _logger.info(
                "Session started: duration_ms=%d end_at_ms=%s background=%s",
                session.duration_ms,
                session.end_at_ms,
                rgb255_to_hex(self._config.background_color),
            )
            self._publish_remaining(self._clock.remaining_ms(now))
            self._emit_state_change()
            return

        if status is SessionStatus.PAUSED:
            now = int(self._now())
            paused_at = session.paused_at_ms
            if self._pause_extends_deadline and paused_at is not None and session.end_at_ms is not None:
                session.end_at_ms += max(0, now - int(paused_at))
            session.paused_at_ms = None
            session.status = SessionStatus.RUNNING
            self._loop.start()
            _logger.info("Session resumed: end_at_ms=%s", session.end_at_ms)
            self._emit_state_change()
            return

        # RUNNING は開始済み、EXPIRED は restart でのみ抜けられる。
        _logger.debug("start ignored: status=%s", status.value)

    def pause(self) -> None:
        """実行中なら一時停止する。"""

        session = self._session
        if session.status is not SessionStatus.RUNNING:
            return
        self._loop.stop()
        session.paused_at_ms = int(self._now())
        session.status = SessionStatus.PAUSED
        _logger.info("Session paused")
        self._emit_state_change()

    def restart(self) -> None:
        """セッションを破棄し、キャンバスをクリアして即座に開始し直す。

        Notes
        -----
        どの状態からでも呼べる。クリアと残り時間の通知は IDLE からの `start()` が 1 回だけ行う。
        """

        self._loop.stop()
        self._session.reset(self._config.duration_ms)
        _logger.info("Session restarted")
        self.start()

    def set_duration_minutes(self, minutes: int) -> None:
        """セッション長を変更する。

        Notes
        -----
        表示中の残り時間が変わるのは IDLE のときだけ。
        開始済みセッションの期限は変えず、次の restart から反映される。
        """

        config = self._config.with_duration_minutes(int(minutes))
        if config == self._config:
            return
        self._config = config
        if self._session.status is SessionStatus.IDLE:
            self._session.reset(config.duration_ms)
            self._publish_remaining(config.duration_ms)
        self._emit_state_change()

    def set_background_color(self, rgb: tuple[int, int, int]) -> None:
        """背景色を変更する（次のクリアから反映される）。"""

        config = self._config.with_background_color(rgb)
        if config == self._config:
            return
        self._config = config
        self._emit_state_change()

    def set_fill_shapes(self, enabled: bool) -> None:
        """fill_shapes を変更する（生成には影響しない）。"""

        config = self._config.with_fill_shapes(enabled)
        if config == self._config:
            return
        self._config = config
        self._emit_state_change()

    def close(self) -> None:
        """生成ループを止める（二重 close は許容する）。"""

        self._loop.stop()

    # ----- 内部 -----
    def _handle_expired(self) -> None:
        snap = self.snapshot()
        self._emit_state_change()
        on_complete = self._on_complete
        if on_complete is not None:
            on_complete(snap)

    def _publish_remaining(self, remaining_ms: int) -> None:
        self._remaining_ms = int(remaining_ms)
        on_remaining = self._on_remaining
        if on_remaining is not None:
            on_remaining(int(remaining_ms))

    def _emit_state_change(self) -> None:
        on_state_change = self._on_state_change
        if on_state_change is not None:
            on_state_change(self.snapshot())


__all__ = ["SessionController", "SessionSnapshot"]
