"""依存境界の破りを import 文の静的解析で検出するテスト。

core は GUI 無しで動く純粋層、export は core のラスタを読むだけの層として保つ。
"""

from __future__ import annotations

import ast
from importlib.util import resolve_name
from pathlib import Path

import pytest

SRC_ROOT = Path(__file__).resolve().parents[2] / "src"
PACKAGE_ROOT = SRC_ROOT / "geomart"

GUI_BACKENDS = ("pyglet", "imgui")


def _module_name(path: Path) -> str:
    parts = list(path.relative_to(SRC_ROOT).with_suffix("").parts)
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)


def _imported_modules(path: Path) -> set[str]:
    """ファイル中の import 先（相対 import は絶対名へ解決）を返す。"""

    module = _module_name(path)
    package = module if path.name == "__init__.py" else module.rpartition(".")[0]
    found: set[str] = set()
    for node in ast.walk(ast.parse(path.read_text(encoding="utf-8"))):
        if isinstance(node, ast.Import):
            found.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom):
            base = resolve_name("." * node.level + (node.module or ""), package)
            found.add(base)
            found.update(f"{base}.{alias.name}" for alias in node.names if alias.name != "*")
    return found


def _violations(paths: list[Path], forbidden: tuple[str, ...]) -> list[str]:
    out: list[str] = []
    for path in paths:
        bad = sorted(
            m for m in _imported_modules(path) if m.split(".")[0] in forbidden or m.startswith(forbidden)
        )
        if bad:
            out.append(f"{path.relative_to(SRC_ROOT)}: {', '.join(bad)}")
    return out


@pytest.mark.parametrize(
    ("layer", "forbidden"),
    [
        ("core", ("geomart.export", "geomart.interactive", "geomart.api", *GUI_BACKENDS)),
        ("export", ("geomart.interactive", "geomart.api", *GUI_BACKENDS)),
    ],
)
def test_layer_does_not_import_upper_layers(layer: str, forbidden: tuple[str, ...]) -> None:
    paths = sorted((PACKAGE_ROOT / layer).rglob("*.py"))
    assert paths, f"{layer} に python ファイルが無い"
    assert _violations(paths, forbidden) == []


@pytest.mark.parametrize(
    "relpath",
    [
        "interactive/runtime/key_bindings.py",
        "interactive/runtime/artwork_download.py",
        "interactive/control_panel/widgets.py",
        "interactive/control_panel/pyglet_backend.py",
    ],
)
def test_headless_modules_do_not_import_gui_backends_at_module_level(relpath: str) -> None:
    """ディスプレイ無しで import できるモジュール（関数内の遅延 import は許す）。"""

    path = PACKAGE_ROOT / relpath
    tree = ast.parse(path.read_text(encoding="utf-8"))
    top_level: set[str] = set()
    for node in tree.body:
        if isinstance(node, ast.Import):
            top_level.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module:
            top_level.add(node.module)
    assert sorted(m for m in top_level if m.split(".")[0] in GUI_BACKENDS) == []


def test_relative_imports_resolve_inside_package() -> None:
    """control_panel の相対 import が geomart 配下の絶対名として数えられる。"""

    modules = _imported_modules(PACKAGE_ROOT / "interactive" / "control_panel" / "__init__.py")
    assert "geomart.interactive.control_panel.gui" in modules
    assert "geomart.interactive.control_panel.pyglet_backend.create_control_panel_window" in modules
