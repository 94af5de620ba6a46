# どこで: `src/geomart/interactive/runtime/artwork_download.py`。
# 何を: UI からの「Download」要求で作品を PNG 保存し、結果をログ/コンソールへ報告する。
# なぜ: 保存失敗をアプリループへ伝播させず、ウィンドウ無しでも失敗時の振る舞いを確認できるようにするため。

from __future__ import annotations

import logging
from pathlib import Path

from geomart.core.surface import CanvasSurface
from geomart.export.image import default_png_output_path, save_png

_logger = logging.getLogger(__name__)


def save_artwork(surface: CanvasSurface, path: Path | None = None) -> Path | None:
    """現在のキャンバスを PNG として保存し、保存先パスを返す。

    Notes
    -----
    失敗は `logging.exception` で記録して None を返す（例外は送出しない）。
    """

    try:
        saved = save_png(surface, path if path is not None else default_png_output_path())
    except Exception as e:
        _logger.exception("Failed to save PNG")
        print(f"Failed to save PNG: {e}")
        return None
    _logger.info("Saved PNG: %s", saved)
    print(f"Saved PNG: {saved}")
    return saved


__all__ = ["save_artwork"]
