"""
どこで: `src/geomart/core/color.py`。
何を: 色表現（`#rrggbb` / RGB255 / RGB01 / HSLA）の相互変換ユーティリティを定義する。
なぜ: 設定ファイル・GUI・ラスタ描画で同じ色を一貫した規則で扱うため。
"""

from __future__ import annotations

import colorsys
import numbers
import re
from dataclasses import dataclass
from typing import Any, cast

_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


@dataclass(frozen=True, slots=True)
class Hsla:
    """HSLA 色。

    Attributes
    ----------
    hue : float
        色相 [deg]（0..360）。
    saturation : float
        彩度 [%]（0..100）。
    lightness : float
        明度 [%]（0..100）。
    alpha : float
        不透明度（0..1）。
    """

    hue: float
    saturation: float
    lightness: float
    alpha: float


def coerce_rgb255(value: object) -> tuple[int, int, int]:
    """値を RGB255 タプル `(r, g, b)`（0..255）に正規化して返す。

    Raises
    ------
    ValueError
        長さ 3 のシーケンスでない場合。
    """

    r: object
    g: object
    b: object
    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    def _clamp(v: object) -> int:
        iv = int(cast(Any, v))
        return 0 if iv < 0 else 255 if iv > 255 else iv

    return _clamp(r), _clamp(g), _clamp(b)


def require_rgb255(value: object) -> tuple[int, int, int]:
    """値を検証して RGB255 タプル `(r, g, b)` を返す（クランプしない）。

    Raises
    ------
    ValueError
        長さ 3 の整数列でない場合、または 0..255 の範囲外の成分を含む場合。
    """

    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc

    out: list[int] = []
    for v in (r, g, b):
        if isinstance(v, bool) or not isinstance(v, numbers.Real) or int(v) != v:
            raise ValueError(f"rgb 成分は整数である必要がある: got={value!r}")
        iv = int(v)
        if not 0 <= iv <= 255:
            raise ValueError(f"rgb 成分は 0..255 である必要がある: got={value!r}")
        out.append(iv)
    return out[0], out[1], out[2]


def parse_hex_color(text: str) -> tuple[int, int, int]:
    """`#rrggbb`（`#` は省略可）を RGB255 に変換して返す。"""

    m = _HEX_COLOR_RE.match(str(text).strip())
    if m is None:
        raise ValueError(f"#rrggbb 形式の色である必要がある: got={text!r}")
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def rgb255_to_hex(rgb: tuple[int, int, int]) -> str:
    """RGB255 を小文字の `#rrggbb` 文字列にして返す。"""

    r, g, b = coerce_rgb255(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb255_to_rgb01(rgb: tuple[int, int, int]) -> tuple[float, float, float]:
    """0..255 int の RGB を 0..1 float の RGB に変換して返す。"""

    r, g, b = rgb
    return float(r) / 255.0, float(g) / 255.0, float(b) / 255.0


def hsla_to_rgba255(color: Hsla) -> tuple[int, int, int, int]:
    """HSLA を RGBA255 に変換して返す。

    Notes
    -----
    色相は 360 で折り返し、彩度/明度/alpha は範囲外をクランプする。
    """

    h = (float(color.hue) % 360.0) / 360.0
    s = min(max(float(color.saturation), 0.0), 100.0) / 100.0
    l = min(max(float(color.lightness), 0.0), 100.0) / 100.0
    a = min(max(float(color.alpha), 0.0), 1.0)

    # colorsys は HLS 順の引数を取る。
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return (
        int(round(r * 255.0)),
        int(round(g * 255.0)),
        int(round(b * 255.0)),
        int(round(a * 255.0)),
    )


__all__ = [
    "Hsla",
    "coerce_rgb255",
    "hsla_to_rgba255",
    "parse_hex_color",
    "require_rgb255",
    "rgb01_to_rgb255",
    "rgb255_to_hex",
    "rgb255_to_rgb01",
]
