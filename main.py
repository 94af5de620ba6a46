"""
どこで: リポジトリ直下 `main.py`。
何を: 既定設定で Geometric Art Generator を起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging
import sys

sys.path.append("src")

from geomart import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run(
        duration_minutes=60,
        background_color="#ffffff",
        control_panel=True,
    )
