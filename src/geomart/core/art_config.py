# どこで: `src/geomart/core/art_config.py`。
# 何を: ユーザーが UI から編集する作品設定（時間/背景色/塗り）の値オブジェクトを定義する。
# なぜ: グローバル変数ではなく、検証済みの不変値として SessionController に渡すため。

from __future__ import annotations

from dataclasses import dataclass, replace

from geomart.core.color import require_rgb255
from geomart.core.session import minutes_to_ms

MIN_DURATION_MINUTES = 1
MAX_DURATION_MINUTES = 360


def clamp_duration_minutes(minutes: int) -> int:
    """duration を 1..360 にクランプして返す。"""

    m = int(minutes)
    return max(MIN_DURATION_MINUTES, min(MAX_DURATION_MINUTES, m))


@dataclass(frozen=True, slots=True)
class ArtConfig:
    """作品設定。

    Attributes
    ----------
    duration_minutes : int
        セッション長 [分]（1..360）。
    background_color : tuple[int, int, int]
        背景色 RGB255。各成分は 0..255（範囲外はクランプせず ValueError）。
    fill_shapes : bool
        UI に出すだけで生成には影響しない（塗り/線の切替は未実装）。
    """

    duration_minutes: int = 60
    background_color: tuple[int, int, int] = (255, 255, 255)
    fill_shapes: bool = True

    def __post_init__(self) -> None:
        minutes = int(self.duration_minutes)
        if not MIN_DURATION_MINUTES <= minutes <= MAX_DURATION_MINUTES:
            raise ValueError(
                "duration_minutes は "
                f"{MIN_DURATION_MINUTES}..{MAX_DURATION_MINUTES} である必要がある: got={self.duration_minutes}"
            )
        object.__setattr__(self, "duration_minutes", minutes)
        object.__setattr__(self, "background_color", require_rgb255(self.background_color))
        object.__setattr__(self, "fill_shapes", bool(self.fill_shapes))

    @property
    def duration_ms(self) -> int:
        return minutes_to_ms(self.duration_minutes)

    def with_duration_minutes(self, minutes: int) -> ArtConfig:
        return replace(self, duration_minutes=int(minutes))

    def with_background_color(self, rgb: tuple[int, int, int]) -> ArtConfig:
        return replace(self, background_color=rgb)

    def with_fill_shapes(self, enabled: bool) -> ArtConfig:
        return replace(self, fill_shapes=bool(enabled))


__all__ = [
    "ArtConfig",
    "MAX_DURATION_MINUTES",
    "MIN_DURATION_MINUTES",
    "clamp_duration_minutes",
]
