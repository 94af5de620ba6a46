from __future__ import annotations

import io
from pathlib import Path

import pytest
from PIL import Image

from geomart.core.runtime_config import set_config_path
from geomart.core.surface import CanvasSurface
from geomart.export import image


# `geomart.export.image`（Pillow による PNG エンコード/保存）をテストする。

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture(autouse=True)
def _reset_runtime_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def _painted_surface() -> CanvasSurface:
    surface = CanvasSurface((40, 20), background_color=(255, 255, 255))
    surface.fill_rect((0, 0, 10, 10), (200, 10, 10))
    return surface


def test_encode_png_is_lossless_and_does_not_modify_surface():
    surface = _painted_surface()
    revision = surface.revision
    raw = surface.to_rgb_bytes()

    data = image.encode_png(surface)

    assert data.startswith(PNG_SIGNATURE)
    assert surface.revision == revision
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.size == (40, 20)
        assert decoded.convert("RGB").tobytes() == raw


def test_default_png_output_path_uses_data_dir():
    path = image.default_png_output_path()
    assert path == Path("data") / "output" / "png" / "geometric-art.png"


def test_save_png_creates_parent_and_never_overwrites(tmp_path: Path):
    surface = _painted_surface()
    target = tmp_path / "nested" / "art.png"

    first = image.save_png(surface, target)
    second = image.save_png(surface, target)
    third = image.save_png(surface, target)

    assert first == target
    assert second == tmp_path / "nested" / "art-1.png"
    assert third == tmp_path / "nested" / "art-2.png"
    assert all(p.read_bytes().startswith(PNG_SIGNATURE) for p in (first, second, third))


def test_save_png_overwrite_keeps_same_path(tmp_path: Path):
    surface = _painted_surface()
    target = tmp_path / "art.png"
    image.save_png(surface, target)

    surface.clear((0, 0, 0))
    saved = image.save_png(surface, target, overwrite=True)

    assert saved == target
    with Image.open(saved) as decoded:
        assert decoded.convert("RGB").getpixel((5, 5)) == (0, 0, 0)


def test_save_png_default_path_is_relative_to_cwd():
    saved = image.save_png(_painted_surface())
    assert saved == Path("data") / "output" / "png" / "geometric-art.png"
    assert saved.is_file()


def test_save_png_rejects_non_png_suffix(tmp_path: Path):
    with pytest.raises(ValueError, match="未対応の画像フォーマット"):
        image.save_png(_painted_surface(), tmp_path / "art.jpg")


def test_preview_image_scales_down():
    preview = image.preview_image(CanvasSurface((1200, 600)), scale=0.5)
    assert preview.size == (600, 300)
    assert preview.mode == "RGB"

    tiny = image.preview_image(CanvasSurface((3, 3)), scale=0.1)
    assert tiny.size == (1, 1)


def test_preview_image_rejects_non_positive_scale():
    with pytest.raises(ValueError):
        image.preview_image(CanvasSurface((10, 10)), scale=0)
