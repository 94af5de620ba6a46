# どこで: `src/geomart/core/session.py`。
# 何を: 1 回の生成セッションの記録（Session）と、そこから残り時間を導く SessionClock を提供する。
# なぜ: 状態（開始/終了時刻）と導出値（残り時間/期限切れ）を分け、時刻を注入してテストできるようにするため。

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum


class SessionStatus(Enum):
    """セッションの状態。"""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    EXPIRED = "expired"


def wall_clock_ms() -> int:
    """現在のエポック時刻 [ms] を返す。"""

    return int(time.time() * 1000)


def minutes_to_ms(minutes: int) -> int:
    return int(minutes) * 60 * 1000


@dataclass(slots=True)
class Session:
    """1 回の生成セッション。

    Notes
    -----
    `end_at_ms` は開始時に `started_at_ms + duration_ms` で一度だけ決まる。
    開始後に duration を変えても再計算しない。
    """

    duration_ms: int
    started_at_ms: int | None = None
    end_at_ms: int | None = None
    status: SessionStatus = SessionStatus.IDLE
    paused_at_ms: int | None = None

    def __post_init__(self) -> None:
        if int(self.duration_ms) <= 0:
            raise ValueError(f"duration_ms は正の値である必要がある: got={self.duration_ms}")
        self.duration_ms = int(self.duration_ms)

    @property
    def is_started(self) -> bool:
        return self.started_at_ms is not None

    def begin(self, now_ms: int) -> None:
        """開始時刻と期限を確定する。"""

        self.started_at_ms = int(now_ms)
        self.end_at_ms = int(now_ms) + int(self.duration_ms)
        self.paused_at_ms = None

    def reset(self, duration_ms: int) -> None:
        """未開始（IDLE）の状態へ戻す。"""

        if int(duration_ms) <= 0:
            raise ValueError(f"duration_ms は正の値である必要がある: got={duration_ms}")
        self.duration_ms = int(duration_ms)
        self.started_at_ms = None
        self.end_at_ms = None
        self.paused_at_ms = None
        self.status = SessionStatus.IDLE


class SessionClock:
    """Session から残り時間/期限切れを導く（Session は変更しない）。"""

    def __init__(self, session: Session) -> None:
        self._session = session

    def remaining_ms(self, now_ms: int) -> int:
        """残り時間 [ms] を返す。未開始なら duration 全体、期限後は 0。"""

        end_at = self._session.end_at_ms
        if end_at is None:
            return int(self._session.duration_ms)
        return max(0, int(end_at) - int(now_ms))

    def is_expired(self, now_ms: int) -> bool:
        """`now_ms >= end_at_ms` なら True（未開始なら False）。"""

        end_at = self._session.end_at_ms
        if end_at is None:
            return False
        return int(now_ms) >= int(end_at)


def format_remaining(milliseconds: int) -> str:
    """残り時間を `分:秒`（秒は 2 桁ゼロ埋め）で返す。"""

    total_seconds = max(0, int(milliseconds)) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


__all__ = [
    "Session",
    "SessionClock",
    "SessionStatus",
    "format_remaining",
    "minutes_to_ms",
    "wall_clock_ms",
]
