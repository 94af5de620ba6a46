"""
どこで: `src/geomart/export/image.py`。
何を: CanvasSurface を PNG（可逆）としてエンコード/保存し、完了ダイアログ用の縮小プレビューを作る。
なぜ: 描画結果（ラスタ）だけが成果物なので、読み出しを 1 箇所に集約して UI から呼べるようにするため。
"""

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from geomart.core.runtime_config import output_root_dir, runtime_config
from geomart.core.surface import CanvasSurface

DEFAULT_PNG_FILENAME = "geometric-art.png"


def encode_png(surface: CanvasSurface) -> bytes:
    """現在のラスタを PNG バイト列として返す（surface は変更しない）。"""

    buf = io.BytesIO()
    with surface.to_image() as image:
        image.save(buf, format="PNG")
    return buf.getvalue()


def preview_image(surface: CanvasSurface, *, scale: float = 0.5) -> Image.Image:
    """縮小プレビュー画像を返す。

    Parameters
    ----------
    surface : CanvasSurface
        読み出し元。
    scale : float
        縮小率。0 より大きい必要がある。既定は半分。

    Returns
    -------
    PIL.Image.Image
        `(int(w * scale), int(h * scale))`（各辺は最低 1px）の RGB 画像。
    """

    s = float(scale)
    if s <= 0:
        raise ValueError(f"scale は正の値である必要がある: got={scale}")
    w, h = surface.size
    out_size = (max(1, int(w * s)), max(1, int(h * s)))
    with surface.to_image() as image:
        return image.resize(out_size, Image.Resampling.LANCZOS)


def default_png_output_path() -> Path:
    """PNG の既定保存パスを返す。

    Notes
    -----
    パスは `{output_root}/png/{export.png.filename}`（既定 `geometric-art.png`）。
    """

    filename = runtime_config().png_filename or DEFAULT_PNG_FILENAME
    return output_root_dir() / "png" / filename


def next_free_path(path: str | Path) -> Path:
    """`path` が既に存在すれば `stem-1.ext`, `stem-2.ext`, ... の空き名を返す。"""

    _path = Path(path)
    if not _path.exists():
        return _path
    index = 1
    while True:
        candidate = _path.with_name(f"{_path.stem}-{index}{_path.suffix}")
        if not candidate.exists():
            return candidate
        index += 1


def save_png(
    surface: CanvasSurface,
    path: str | Path | None = None,
    *,
    overwrite: bool = False,
) -> Path:
    """ラスタを PNG として保存し、保存先パスを返す。

    Notes
    -----
    `path=None` の場合は `default_png_output_path()` を使う。
    `overwrite=False` の場合、既存ファイルは上書きせず連番の空き名へ保存する。
    """

    _path = Path(path) if path is not None else default_png_output_path()
    if _path.suffix.lower() != ".png":
        raise ValueError(f"未対応の画像フォーマット: {_path.suffix!r}")
    if not overwrite:
        _path = next_free_path(_path)
    data = encode_png(surface)
    _path.parent.mkdir(parents=True, exist_ok=True)
    _path.write_bytes(data)
    return _path


__all__ = [
    "DEFAULT_PNG_FILENAME",
    "default_png_output_path",
    "encode_png",
    "next_free_path",
    "preview_image",
    "save_png",
]
