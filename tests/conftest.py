"""
Pytest fixtures: Flask app, clients and generated images.
"""

import io

import pytest
from PIL import Image

from lsbscan import create_app

# One row of red values whose pairs split evenly between "greater" and "not greater"
BALANCED_ROW = [100, 150, 100, 50]
# Every pair has a greater successor
ORDERED_ROW = [100, 200] * 4


def rgba_buffer(reds):
    """RGBA bytes with the given red channel values and zeroed G/B/A."""
    out = bytearray()
    for r in reds:
        out.extend((r, 0, 0, 0))
    return bytes(out)


def red_image(reds, width, mode='RGB'):
    height = len(reds) // width
    img = Image.new('RGB', (width, height))
    img.putdata([(r, 0, 0) for r in reds])
    if mode != 'RGB':
        img = img.convert(mode)
    return img


def png_bytes(img, fmt='PNG'):
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'LOG_LEVEL': 'WARNING',
        'FRONTEND_BUILD_DIR': str(tmp_path / 'no-frontend-build'),
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def balanced_png():
    """4x4 image whose pairs are half greater, half lesser."""
    return png_bytes(red_image(BALANCED_ROW * 4, width=4))


@pytest.fixture
def ordered_png():
    """8x8 image whose pairs all have a greater successor."""
    return png_bytes(red_image(ORDERED_ROW * 8, width=8))


@pytest.fixture
def image_files(tmp_path, balanced_png, ordered_png):
    balanced = tmp_path / 'balanced.png'
    balanced.write_bytes(balanced_png)
    ordered = tmp_path / 'ordered.png'
    ordered.write_bytes(ordered_png)
    garbage = tmp_path / 'garbage.png'
    garbage.write_bytes(b'definitely not an image')
    return {'balanced': balanced, 'ordered': ordered, 'garbage': garbage}
