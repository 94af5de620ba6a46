# どこで: `src/geomart/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/タイマー/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/geomart/api/runner.py` を配線だけに保ち、責務ごとの実装差し替えを容易にするため。

from __future__ import annotations

__all__ = []
