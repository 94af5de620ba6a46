# どこで: `src/geomart/interactive/runtime/art_window_system.py`。
# 何を: 作品ウィンドウ（キャンバス表示 / 残り時間 HUD / キー操作 / 完了ダイアログ）のサブシステムを提供する。
# なぜ: `src/geomart/api/runner.py` の `run()` を「配線」に寄せ、表示とセッション駆動の責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
import pyglet
from pyglet.window import key

from geomart.core.art_config import ArtConfig
from geomart.core.session import SessionStatus, format_remaining
from geomart.core.session_controller import SessionController, SessionSnapshot
from geomart.core.surface import CanvasSurface
from geomart.core.timer import RepeatingTimer
from geomart.export.image import preview_image
from geomart.interactive.draw_window import create_art_window
from geomart.interactive.render_settings import HUD_HEIGHT, RenderSettings
from geomart.interactive.runtime.artwork_download import save_artwork
from geomart.interactive.runtime.key_bindings import KeyBindings, dispatch_key
from geomart.interactive.runtime.pyglet_timer import PygletTimer

_logger = logging.getLogger(__name__)

KEY_BINDINGS = KeyBindings(
    toggle=key.SPACE,
    restart=key.R,
    download=key.D,
    longer=key.UP,
    shorter=key.DOWN,
    fast_modifier=key.MOD_SHIFT,
)

_STATUS_LABELS = {
    SessionStatus.IDLE: "Ready",
    SessionStatus.RUNNING: "Running",
    SessionStatus.PAUSED: "Paused",
    SessionStatus.EXPIRED: "Complete",
}

_HUD_TEXT_COLOR = (40, 40, 40, 255)
_MODAL_TEXT_COLOR = (255, 255, 255, 255)
_KEY_HINTS = "Space: Start/Pause   R: Restart   D: Download   Up/Down: Duration"


def _rgb_image_data(width: int, height: int, rgb: bytes) -> Any:
    """上の行から並んだ RGB24 を pyglet の ImageData にする（負の pitch で上下を合わせる）。"""

    return pyglet.image.ImageData(int(width), int(height), "RGB", rgb, pitch=-int(width) * 3)


class ArtWindowSystem:
    """作品ウィンドウのサブシステム。

    CanvasSurface と SessionController を所有し、生成 tick は pyglet clock 上で回す。
    """

    def __init__(
        self,
        *,
        settings: RenderSettings,
        config: ArtConfig,
        timer: RepeatingTimer | None = None,
        rng: np.random.Generator | None = None,
        png_output_path: Path | None = None,
    ) -> None:
        self._settings = settings
        self.surface = CanvasSurface(settings.canvas_size, background_color=config.background_color)
        self.controller = SessionController(
            self.surface,
            timer if timer is not None else PygletTimer(),
            config=config,
            rng=rng,
            interval_ms=settings.tick_interval_ms,
            pause_extends_deadline=settings.pause_extends_deadline,
            on_state_change=self._on_state_change,
            on_complete=self._on_complete,
        )
        self._png_output_path = png_output_path

        self.window = create_art_window(settings)
        self.window.push_handlers(on_key_press=self._on_key_press)

        # テクスチャは surface の revision が変わったときだけ作り直す。
        self._canvas_texture: Any = None
        self._canvas_revision = -1
        # 完了ダイアログ用の縮小プレビュー（EXPIRED 中だけ保持する）。
        self._preview_texture: Any = None

        canvas_w, canvas_h = settings.canvas_size
        self._batch = pyglet.graphics.Batch()
        hud_y = int(canvas_h) + HUD_HEIGHT // 2
        self._time_label = pyglet.text.Label(
            "",
            x=12,
            y=hud_y,
            anchor_y="center",
            font_size=14,
            bold=True,
            color=_HUD_TEXT_COLOR,
            batch=self._batch,
        )
        self._hint_label = pyglet.text.Label(
            _KEY_HINTS,
            x=int(canvas_w) - 12,
            y=hud_y,
            anchor_x="right",
            anchor_y="center",
            font_size=10,
            color=_HUD_TEXT_COLOR,
            batch=self._batch,
        )

        self._modal_batch = pyglet.graphics.Batch()
        self._modal_overlay = pyglet.shapes.Rectangle(
            0, 0, int(canvas_w), int(canvas_h), color=(0, 0, 0, 160), batch=self._modal_batch
        )
        self._modal_title = pyglet.text.Label(
            "Your artwork is complete!",
            x=int(canvas_w) // 2,
            y=int(canvas_h) - 28,
            anchor_x="center",
            anchor_y="center",
            font_size=18,
            bold=True,
            color=_MODAL_TEXT_COLOR,
            batch=self._modal_batch,
        )
        self._modal_actions = pyglet.text.Label(
            "Download [D]     Restart [R]",
            x=int(canvas_w) // 2,
            y=24,
            anchor_x="center",
            anchor_y="center",
            font_size=14,
            color=_MODAL_TEXT_COLOR,
            batch=self._modal_batch,
        )

        self._refresh_hud(self.controller.snapshot())

    # ----- 入力 -----
    def _on_key_press(self, symbol: int, modifiers: int) -> None:
        dispatch_key(
            self.controller,
            KEY_BINDINGS,
            symbol,
            modifiers,
            download=self.save_png,
        )

    # ----- 操作 -----
    def save_png(self) -> Path | None:
        """現在のキャンバスを PNG として保存し、保存先パスを返す（失敗時は None）。"""

        return save_artwork(self.surface, self._png_output_path)

    # ----- セッション通知 -----
    def _on_state_change(self, snap: SessionSnapshot) -> None:
        if snap.status is not SessionStatus.EXPIRED:
            self._preview_texture = None
        self._refresh_hud(snap)

    def _on_complete(self, snap: SessionSnapshot) -> None:
        image = preview_image(self.surface, scale=self._settings.preview_scale)
        with image:
            self._preview_texture = _rgb_image_data(
                image.width, image.height, image.tobytes()
            ).get_texture()
        _logger.debug("Completion preview ready: %dx%d", image.width, image.height)
        self._refresh_hud(snap)

    def _refresh_hud(self, snap: SessionSnapshot) -> None:
        status = _STATUS_LABELS[snap.status]
        text = (
            f"Remaining Time: {format_remaining(snap.remaining_ms)}"
            f"   ({snap.duration_minutes} min, {status})"
        )
        # Label はテキスト代入のたびにレイアウトし直すので、変化したときだけ差し替える。
        if text != self._time_label.text:
            self._time_label.text = text

    # ----- 描画 -----
    def _sync_canvas_texture(self) -> None:
        surface = self.surface
        if surface.revision == self._canvas_revision and self._canvas_texture is not None:
            return
        self._canvas_texture = _rgb_image_data(
            surface.width, surface.height, surface.to_rgb_bytes()
        ).get_texture()
        self._canvas_revision = surface.revision

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        pyglet.gl.glClearColor(0.93, 0.93, 0.93, 1.0)
        self.window.clear()

        self._sync_canvas_texture()
        self._canvas_texture.blit(0, 0)

        # 残り時間は tick ごとに通知されるが、ラベル更新は描画側でまとめて行う。
        self._refresh_hud(self.controller.snapshot())
        self._batch.draw()

        preview = self._preview_texture
        if preview is not None and self.controller.status is SessionStatus.EXPIRED:
            self._modal_batch.draw()
            canvas_w, canvas_h = self._settings.canvas_size
            x = (int(canvas_w) - int(preview.width)) // 2
            y = (int(canvas_h) - int(preview.height)) // 2
            preview.blit(x, y)

    def close(self) -> None:
        """生成ループを止め、window と surface を解放する。"""

        self.controller.close()
        self.window.close()
        self.surface.release()


__all__ = ["ArtWindowSystem", "KEY_BINDINGS"]
