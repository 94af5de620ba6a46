# どこで: `src/geomart/core/surface.py`。
# 何を: 作品のラスタ（Pillow Image）を保持し、塗り/クリア/読み出しを提供する。
# なぜ: 描画先を 1 つの可変バッファに閉じ込め、GUI/エクスポートと疎結合にするため。

from __future__ import annotations

from collections.abc import Sequence

from PIL import Image, ImageDraw

from geomart.core.color import coerce_rgb255


class CanvasSurface:
    """固定サイズの RGB ラスタ。

    Notes
    -----
    塗りは不可逆で、履歴は持たない。
    ピクセルを変更するたびに `revision` が 1 増える。
    `release()` 後の操作は `RuntimeError` になる。
    """

    def __init__(
        self,
        size: tuple[int, int],
        *,
        background_color: tuple[int, int, int] = (255, 255, 255),
    ) -> None:
        w, h = size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError(f"size は正の (width, height) である必要がある: got={size!r}")
        self._size = (int(w), int(h))
        self._image: Image.Image | None = Image.new(
            "RGB", self._size, color=coerce_rgb255(background_color)
        )
        self._revision = 0

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) を返す。"""

        return self._size

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    @property
    def revision(self) -> int:
        """ピクセル変更回数を返す。"""

        return self._revision

    @property
    def is_released(self) -> bool:
        return self._image is None

    def _require_image(self) -> Image.Image:
        image = self._image
        if image is None:
            raise RuntimeError("CanvasSurface は解放済みです（release() 後は使用できない）")
        return image

    def clear(self, color: tuple[int, int, int]) -> None:
        """全面を不透明色で塗りつぶす。"""

        w, h = self._size
        self.fill_rect((0, 0, w, h), color)

    def fill_rect(self, rect: tuple[int, int, int, int], color: tuple[int, int, int]) -> None:
        """矩形 `(x0, y0, x1, y1)`（x1/y1 は含まない）を不透明色で塗る。"""

        image = self._require_image()
        x0, y0, x1, y1 = rect
        image.paste(coerce_rgb255(color), (int(x0), int(y0), int(x1), int(y1)))
        self._revision += 1

    def fill_polygon(
        self,
        vertices: Sequence[tuple[float, float]],
        rgba: tuple[int, int, int, int],
    ) -> None:
        """閉じた多角形を半透明色で塗る（線は描かない）。

        Parameters
        ----------
        vertices : Sequence[tuple[float, float]]
            頂点列（ピクセル座標）。終点から始点へは自動で閉じる。
        rgba : tuple[int, int, int, int]
            塗り色。alpha は既存ピクセルとのブレンド率。
        """

        image = self._require_image()
        pts = [(float(x), float(y)) for x, y in vertices]
        if len(pts) < 3:
            raise ValueError(f"多角形には 3 頂点以上が必要: got={len(pts)}")
        # RGB 画像へ "RGBA" モードの Draw を使うと、塗り色の alpha でブレンドされる。
        draw = ImageDraw.Draw(image, "RGBA")
        draw.polygon(pts, fill=tuple(int(c) for c in rgba))
        self._revision += 1

    def pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """(x, y) の RGB を返す。"""

        image = self._require_image()
        r, g, b = image.getpixel((int(x), int(y)))  # type: ignore[misc]
        return int(r), int(g), int(b)

    def to_rgb_bytes(self) -> bytes:
        """上の行から順に並んだ RGB24 の生バイト列を返す。"""

        return self._require_image().tobytes()

    def to_image(self) -> Image.Image:
        """現在のラスタのコピーを返す（呼び出し側の変更は反映されない）。"""

        return self._require_image().copy()

    def release(self) -> None:
        """ラスタを解放する（二重 release は許容する）。"""

        image = self._image
        self._image = None
        if image is not None:
            image.close()


__all__ = ["CanvasSurface"]
