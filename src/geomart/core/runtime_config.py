# どこで: `src/geomart/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: キャンバス寸法・初期設定・出力先などをコードを触らずにユーザーが指定できるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

from geomart.core.art_config import ArtConfig
from geomart.core.color import parse_hex_color, require_rgb255


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """geomart の実行時設定。"""

    config_path: Path | None
    output_dir: Path
    duration_minutes: int
    background_color: tuple[int, int, int]
    fill_shapes: bool
    canvas_size: tuple[int, int]
    tick_interval_ms: int
    pause_extends_deadline: bool
    png_filename: str
    preview_scale: float
    control_panel: bool
    window_pos_art: tuple[int, int]
    window_pos_control_panel: tuple[int, int]
    control_panel_window_size: tuple[int, int]

    def art_config(self) -> ArtConfig:
        """設定値から初期 ArtConfig を作って返す。"""

        return ArtConfig(
            duration_minutes=self.duration_minutes,
            background_color=self.background_color,
            fill_shapes=self.fill_shapes,
        )


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _CONFIG_CACHE = None
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        return
    _EXPLICIT_CONFIG_PATH = Path(str(path)).expanduser()


def _default_config_candidates() -> tuple[Path, ...]:
    return (
        Path.cwd() / ".geomart" / "config.yaml",
        Path.home() / ".config" / "geomart" / "config.yaml",
    )


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(os.path.expandvars(os.path.expanduser(s)))


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _require(value: Any, *, key: str) -> Any:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    return value


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    try:
        seq = list(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        return int(seq[0]), int(seq[1])
    except Exception as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc


def _as_positive_size(value: Any, *, key: str) -> tuple[int, int]:
    w, h = _as_int_pair(value, key=key)
    if w <= 0 or h <= 0:
        raise ValueError(f"{key} は正の (width, height) である必要があります: got={value!r}")
    return w, h


def _as_int(value: Any, *, key: str) -> int:
    if isinstance(value, bool):
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は整数である必要があります: got={value!r}") from exc


def _as_float(value: Any, *, key: str) -> float:
    try:
        return float(value)
    except Exception as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise RuntimeError(f"{key} は true/false である必要があります: got={value!r}")


def _as_rgb255(value: Any, *, key: str) -> tuple[int, int, int]:
    try:
        if isinstance(value, str):
            return parse_hex_color(value)
        return require_rgb255(value)
    except ValueError as exc:
        raise RuntimeError(
            f"{key} は '#rrggbb' または [r, g, b] である必要があります: got={value!r}"
        ) from exc


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml

    try:
        data = yaml.safe_load(text)
    except Exception as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("geomart")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="geomart/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション単位で上書きした dict を返す。

    Notes
    -----
    セクション（mapping）同士は 1 段だけキー単位で統合する。
    例: override が `art: {duration_minutes: 5}` だけでも、art の他キーは既定値が残る。
    """

    out = dict(base)
    for key, value in override.items():
        prev = out.get(key)
        if isinstance(prev, dict) and isinstance(value, dict):
            merged = dict(prev)
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = _require(payload.get("version"), key="version")
    version_i = _as_int(version, key="version")
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    output_dir = _as_optional_path(paths.get("output_dir"))
    if output_dir is None:
        raise RuntimeError(
            "paths.output_dir が未設定です（同梱 default_config.yaml を確認してください）"
        )

    art = _as_mapping(payload.get("art"), key="art")
    duration_minutes = _as_int(
        _require(art.get("duration_minutes"), key="art.duration_minutes"),
        key="art.duration_minutes",
    )
    background_color = _as_rgb255(
        _require(art.get("background_color"), key="art.background_color"),
        key="art.background_color",
    )
    fill_shapes = _as_bool(
        _require(art.get("fill_shapes"), key="art.fill_shapes"), key="art.fill_shapes"
    )
    canvas_size = _as_positive_size(
        _require(art.get("canvas_size"), key="art.canvas_size"), key="art.canvas_size"
    )
    tick_interval_ms = _as_int(
        _require(art.get("tick_interval_ms"), key="art.tick_interval_ms"),
        key="art.tick_interval_ms",
    )
    if tick_interval_ms <= 0:
        raise ValueError(f"art.tick_interval_ms は正の値である必要があります: got={tick_interval_ms}")
    pause_extends_deadline = _as_bool(
        _require(art.get("pause_extends_deadline"), key="art.pause_extends_deadline"),
        key="art.pause_extends_deadline",
    )

    export = _as_mapping(payload.get("export"), key="export")
    png = _as_mapping(export.get("png"), key="export.png")
    png_filename = str(_require(png.get("filename"), key="export.png.filename")).strip()
    if not png_filename:
        raise RuntimeError("export.png.filename は空でない必要があります")
    preview_scale = _as_float(
        _require(png.get("preview_scale"), key="export.png.preview_scale"),
        key="export.png.preview_scale",
    )
    if preview_scale <= 0:
        raise ValueError(f"export.png.preview_scale は正の値である必要があります: got={preview_scale}")

    ui = _as_mapping(payload.get("ui"), key="ui")
    control_panel = _as_bool(
        _require(ui.get("control_panel"), key="ui.control_panel"), key="ui.control_panel"
    )
    window_positions = _as_mapping(ui.get("window_positions"), key="ui.window_positions")
    window_pos_art = _as_int_pair(
        _require(window_positions.get("art"), key="ui.window_positions.art"),
        key="ui.window_positions.art",
    )
    window_pos_control_panel = _as_int_pair(
        _require(
            window_positions.get("control_panel"), key="ui.window_positions.control_panel"
        ),
        key="ui.window_positions.control_panel",
    )
    panel = _as_mapping(ui.get("control_panel_window"), key="ui.control_panel_window")
    control_panel_window_size = _as_positive_size(
        _require(panel.get("size"), key="ui.control_panel_window.size"),
        key="ui.control_panel_window.size",
    )

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=output_dir,
        duration_minutes=duration_minutes,
        background_color=background_color,
        fill_shapes=fill_shapes,
        canvas_size=canvas_size,
        tick_interval_ms=tick_interval_ms,
        pause_extends_deadline=pause_extends_deadline,
        png_filename=png_filename,
        preview_scale=float(preview_scale),
        control_panel=control_panel,
        window_pos_art=window_pos_art,
        window_pos_control_panel=window_pos_control_panel,
        control_panel_window_size=control_panel_window_size,
    )
    # duration の範囲検査は ArtConfig に任せる。
    cfg.art_config()
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.geomart/config.yaml` / `~/.config/geomart/config.yaml`
    3) `run(..., config_path=...)` の `config_path`
    """

    return Path(runtime_config().output_dir)


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
