# どこで: `src/geomart/api/__init__.py`。
# 何を: 公開 API パッケージのエントリポイントとして run と、ヘッドレスで使えるエクスポート関数を再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from geomart.export.image import encode_png, save_png

__all__ = ["encode_png", "run", "save_png"]


def run(*args, **kwargs):
    """公開 run API へのラッパ（遅延インポートで GUI 依存を後回しにする）。"""

    from .runner import run as _run

    return _run(*args, **kwargs)
