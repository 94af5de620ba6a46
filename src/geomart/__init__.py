# どこで: `src/geomart/__init__.py`。
# 何を: ルート `geomart` パッケージを定義する。
# なぜ: import 起点を `geomart` に統一するため。

from __future__ import annotations

from geomart.api import encode_png, run, save_png

__all__ = ["encode_png", "run", "save_png"]
