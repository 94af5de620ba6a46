# どこで: `src/geomart/interactive/control_panel/widgets.py`。
# 何を: コントロールパネルの各ウィジェット（時間/背景色/塗り/ボタン/完了モーダル）を描画し、要求された操作を返す。
# なぜ: ImGui 呼び出しと SessionController への反映を分け、描画関数を fake imgui でテストできるようにするため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from geomart.core.art_config import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES
from geomart.core.color import rgb01_to_rgb255, rgb255_to_rgb01
from geomart.core.session import SessionStatus, format_remaining
from geomart.core.session_controller import SessionController, SessionSnapshot

COMPLETE_POPUP_ID = "Session Complete"


@dataclass(slots=True)
class PanelActions:
    """1 フレームの UI 操作で要求された変更。"""

    duration_minutes: int | None = None
    background_color: tuple[int, int, int] | None = None
    fill_shapes: bool | None = None
    toggle: bool = False
    restart: bool = False
    download: bool = False

    @property
    def any(self) -> bool:
        return (
            self.duration_minutes is not None
            or self.background_color is not None
            or self.fill_shapes is not None
            or self.toggle
            or self.restart
            or self.download
        )


def render_settings_widgets(imgui: Any, snap: SessionSnapshot, actions: PanelActions) -> None:
    """時間スライダー / 背景色 / 塗りチェックボックスを描画する。"""

    imgui.text(f"Duration (minutes): {snap.duration_minutes}")
    changed, minutes = imgui.slider_int(
        "##duration",
        int(snap.duration_minutes),
        MIN_DURATION_MINUTES,
        MAX_DURATION_MINUTES,
    )
    if changed:
        actions.duration_minutes = int(minutes)

    rf, gf, bf = rgb255_to_rgb01(snap.background_color)
    changed, out = imgui.color_edit3("Background Color", float(rf), float(gf), float(bf))
    if changed:
        r2, g2, b2 = out
        actions.background_color = rgb01_to_rgb255((float(r2), float(g2), float(b2)))

    clicked, state = imgui.checkbox("Fill Shapes", bool(snap.fill_shapes))
    if clicked:
        actions.fill_shapes = bool(state)


def render_session_buttons(imgui: Any, snap: SessionSnapshot, actions: PanelActions) -> None:
    """Start/Pause・Restart・Download ボタンと残り時間を描画する。"""

    if imgui.button("Pause" if snap.is_running else "Start"):
        actions.toggle = True
    imgui.same_line()
    if imgui.button("Restart"):
        actions.restart = True
    imgui.same_line()
    if imgui.button("Download Artwork"):
        actions.download = True

    imgui.separator()
    imgui.text(f"Remaining Time: {format_remaining(snap.remaining_ms)}")


def render_complete_popup(
    imgui: Any,
    snap: SessionSnapshot,
    actions: PanelActions,
    *,
    request_open: bool,
) -> None:
    """完了モーダル（Download / Restart）を描画する。

    Notes
    -----
    `request_open=True` のフレームでポップアップを開く。
    開いたあとの表示/クローズは ImGui 側の状態に従う。
    """

    if request_open:
        imgui.open_popup(COMPLETE_POPUP_ID)

    opened, _visible = imgui.begin_popup_modal(
        COMPLETE_POPUP_ID, flags=imgui.WINDOW_ALWAYS_AUTO_RESIZE
    )
    if not opened:
        return
    try:
        imgui.text("Your artwork is complete!")
        if imgui.button("Download"):
            actions.download = True
        imgui.same_line()
        if imgui.button("Restart"):
            actions.restart = True
            imgui.close_current_popup()
        imgui.same_line()
        if imgui.button("Close") or snap.status is not SessionStatus.EXPIRED:
            imgui.close_current_popup()
    finally:
        imgui.end_popup()


def apply_actions(
    controller: SessionController,
    actions: PanelActions,
    *,
    download: Callable[[], object],
) -> None:
    """要求された操作を SessionController へ反映する。

    Notes
    -----
    設定変更を先に反映してから、開始/再開始を行う（新しい背景色でクリアされるようにする）。
    """

    if actions.duration_minutes is not None:
        controller.set_duration_minutes(actions.duration_minutes)
    if actions.background_color is not None:
        controller.set_background_color(actions.background_color)
    if actions.fill_shapes is not None:
        controller.set_fill_shapes(actions.fill_shapes)
    if actions.restart:
        controller.restart()
    elif actions.toggle:
        controller.toggle()
    if actions.download:
        download()


__all__ = [
    "COMPLETE_POPUP_ID",
    "PanelActions",
    "apply_actions",
    "render_complete_popup",
    "render_session_buttons",
    "render_settings_widgets",
]
