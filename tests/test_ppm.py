"""Test binary PPM serialization.

Tests for opencad.raster.ppm:
    - Header bytes are exactly "P6\\n<w> <h>\\n255\\n"
    - 2×2 red/green/blue/gray buffer → 12 RGB bytes, alpha dropped
    - Existing files are truncated
    - Unwritable destinations return a nonzero errno (no exception)
    - write_ppm raises the OSError unchanged
    - The handle is closed when a write fails part way (truncated file kept)
    - read_ppm/decode_ppm round trip, header comments, malformed input
    - Pillow reads the output as a standard RGB image

Run:
    pytest tests/test_ppm.py -v
"""

import errno
import io
import os

import numpy as np
import pytest
from PIL import Image

from opencad.raster import ppm
from opencad.raster.buffer import PixelView

HEADER_2X2 = b"P6\n2 2\n255\n"
RGBG_PIXELS = np.array([0xFF0000FF, 0xFF00FF00, 0xFFFF0000, 0xFF808080], dtype=np.uint32)
RGBG_BODY = bytes([
    0xFF, 0x00, 0x00,
    0x00, 0xFF, 0x00,
    0x00, 0x00, 0xFF,
    0x80, 0x80, 0x80,
])


def test_encode_header():
    assert ppm.encode_header(2, 2) == HEADER_2X2
    assert ppm.encode_header(800, 600) == b"P6\n800 600\n255\n"


def test_encode_header_rejects_negative():
    with pytest.raises(ValueError):
        ppm.encode_header(-1, 2)


def test_save_2x2_exact_bytes(tmp_path):
    path = tmp_path / "rgbg.ppm"
    err = ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, path)

    assert err == 0
    assert path.read_bytes() == HEADER_2X2 + RGBG_BODY


def test_encode_ppm_matches_file(tmp_path):
    path = tmp_path / "rgbg.ppm"
    ppm.write_ppm(RGBG_PIXELS, 2, 2, path)
    assert ppm.encode_ppm(RGBG_PIXELS, 2, 2) == path.read_bytes()


def test_alpha_is_dropped():
    transparent = np.array([0x000000FF, 0x7F00FF00], dtype=np.uint32)
    assert ppm.encode_pixels(transparent, 2, 1) == bytes([0xFF, 0, 0, 0, 0xFF, 0])


def test_row_major_order(tmp_path):
    view = PixelView.allocate(3, 2, color=0xFF000000)
    view.fill_rect(2, 1, 1, 1, 0xFF0000FF)
    path = tmp_path / "corner.ppm"
    assert view.save_ppm(path) == 0

    body = path.read_bytes()[len(b"P6\n3 2\n255\n"):]
    assert len(body) == 3 * 2 * 3
    assert body[-3:] == b"\xff\x00\x00"
    assert body[:-3] == bytes(15)


def test_existing_file_truncated(tmp_path):
    path = tmp_path / "out.ppm"
    path.write_bytes(b"x" * 1000)
    assert ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, path) == 0
    assert path.read_bytes() == HEADER_2X2 + RGBG_BODY


def test_missing_directory_returns_errno(tmp_path):
    path = tmp_path / "missing" / "out.ppm"
    err = ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, path)

    assert err == errno.ENOENT
    assert os.strerror(err)
    assert not path.exists()


def test_directory_destination_returns_errno(tmp_path):
    err = ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, tmp_path)
    assert err != 0


def test_write_ppm_raises_oserror(tmp_path):
    with pytest.raises(OSError) as exc_info:
        ppm.write_ppm(RGBG_PIXELS, 2, 2, tmp_path / "missing" / "out.ppm")
    assert exc_info.value.errno == errno.ENOENT


class _FullDisk(io.BytesIO):
    """File object that fails with ENOSPC once `limit` bytes are written."""

    def __init__(self, limit):
        super().__init__()
        self.limit = limit
        self.written = b""

    def write(self, data):
        if len(self.written) + len(data) > self.limit:
            raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))
        self.written += bytes(data)
        return super().write(data)


def test_mid_write_failure_closes_handle(monkeypatch):
    opened = []

    def fake_open(path, mode):
        assert mode == 'wb'
        f = _FullDisk(limit=len(HEADER_2X2) + 6)
        opened.append(f)
        return f

    monkeypatch.setattr(ppm, "open", fake_open, raising=False)
    err = ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, "disk-full.ppm")

    assert err == errno.ENOSPC
    assert len(opened) == 1
    assert opened[0].closed
    # Header and first row made it out; nothing is rolled back
    assert opened[0].written == HEADER_2X2 + RGBG_BODY[:6]


def test_read_back_roundtrip(tmp_path):
    view = PixelView.allocate(5, 4, color=0xFF202020)
    view.fill_circle(2, 2, 1, 0xFF2020FF)
    view.draw_line(0, 3, 4, 3, 0xFF20FF20)
    path = tmp_path / "scene.ppm"
    assert view.save_ppm(path) == 0

    loaded = PixelView.from_ppm(path)
    assert (loaded.width, loaded.height) == (5, 4)
    np.testing.assert_array_equal(loaded.pixels, view.pixels)


def test_read_sets_opaque_alpha(tmp_path):
    pixels = np.array([0x00112233], dtype=np.uint32)
    path = tmp_path / "a.ppm"
    ppm.write_ppm(pixels, 1, 1, path)

    loaded, width, height = ppm.read_ppm(path)
    assert (width, height) == (1, 1)
    assert int(loaded[0]) == 0xFF112233


def test_decode_header_with_comments():
    data = b"P6\n# made by hand\n2 1\n# max\n255\n" + bytes([1, 2, 3, 4, 5, 6])
    pixels, width, height = ppm.decode_ppm(data)
    assert (width, height) == (2, 1)
    assert [int(p) for p in pixels] == [0xFF030201, 0xFF060504]


@pytest.mark.parametrize("data", [
    b"P3\n1 1\n255\n0 0 0",
    b"P6\n1 1\n65535\n" + bytes(6),
    b"P6\n2 2\n255\n" + bytes(5),
    b"P6\nx 2\n255\n" + bytes(12),
    b"P6\n2",
    b"",
])
def test_decode_malformed(data):
    with pytest.raises(ppm.PPMFormatError):
        ppm.decode_ppm(data)


def test_format_error_is_value_error():
    assert issubclass(ppm.PPMFormatError, ValueError)


def test_pillow_reads_output(tmp_path):
    path = tmp_path / "rgbg.ppm"
    assert ppm.save_to_ppm_file(RGBG_PIXELS, 2, 2, path) == 0

    with Image.open(path) as img:
        assert img.format == "PPM"
        assert img.mode == "RGB"
        assert img.size == (2, 2)
        rgb = np.asarray(img)

    np.testing.assert_array_equal(
        rgb,
        np.array([[[255, 0, 0], [0, 255, 0]], [[0, 0, 255], [128, 128, 128]]], dtype=np.uint8),
    )
