# どこで: `src/geomart/interactive/runtime/key_bindings.py`。
# 何を: 作品ウィンドウのキー入力を SessionController の操作へ対応付ける。
# なぜ: キー割り当てを window から切り離し、ディスプレイ無しでも振る舞いをテストできるようにするため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from geomart.core.art_config import clamp_duration_minutes
from geomart.core.session_controller import SessionController

DURATION_STEP_MINUTES = 1
DURATION_STEP_MINUTES_FAST = 10


@dataclass(frozen=True, slots=True)
class KeyBindings:
    """キーシンボル（pyglet.window.key の値）と操作の対応。"""

    toggle: int
    restart: int
    download: int
    longer: int
    shorter: int
    fast_modifier: int


def dispatch_key(
    controller: SessionController,
    bindings: KeyBindings,
    symbol: int,
    modifiers: int,
    *,
    download: Callable[[], object],
) -> bool:
    """キー入力を処理し、対応する操作があれば True を返す。"""

    if symbol == bindings.toggle:
        controller.toggle()
        return True
    if symbol == bindings.restart:
        controller.restart()
        return True
    if symbol == bindings.download:
        download()
        return True
    if symbol in (bindings.longer, bindings.shorter):
        step = (
            DURATION_STEP_MINUTES_FAST
            if modifiers & bindings.fast_modifier
            else DURATION_STEP_MINUTES
        )
        if symbol == bindings.shorter:
            step = -step
        minutes = clamp_duration_minutes(controller.config.duration_minutes + step)
        controller.set_duration_minutes(minutes)
        return True
    return False


__all__ = ["DURATION_STEP_MINUTES", "DURATION_STEP_MINUTES_FAST", "KeyBindings", "dispatch_key"]
