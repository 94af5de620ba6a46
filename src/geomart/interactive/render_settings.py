# どこで: `src/geomart/interactive/render_settings.py`。
# 何を: interactive 実行の設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

# 作品ウィンドウ上部の残り時間表示（HUD）の高さ [px]。
HUD_HEIGHT = 40


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """作品ウィンドウとセッション駆動に用いる設定値の集合。"""

    canvas_size: tuple[int, int] = (1200, 600)
    tick_interval_ms: int = 100
    pause_extends_deadline: bool = False
    preview_scale: float = 0.5
    fps: float = 60.0

    @property
    def window_size(self) -> tuple[int, int]:
        """キャンバス + HUD を収めるウィンドウ寸法を返す。"""

        w, h = self.canvas_size
        return int(w), int(h) + HUD_HEIGHT


__all__ = ["HUD_HEIGHT", "RenderSettings"]
