"""Pytest configuration and shared fixtures."""

import io

import pytest
import yaml
from PIL import Image, ImageCms


@pytest.fixture
def sample_config(tmp_path):
    """Provide a sample configuration for testing."""
    return {
        'loader': {
            'access': 'random',
            'all_pages': True,
            'bmp_fallback': True
        },
        'logging': {
            'level': 'DEBUG',
            'file': str(tmp_path / 'logs' / 'test.log'),
            'console_output': False
        }
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Write the sample configuration to a YAML file."""
    path = tmp_path / 'config.yaml'
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(sample_config, f)
    return path


@pytest.fixture
def png_path(tmp_path):
    """Create a plain 60x300 PNG."""
    path = tmp_path / 'plain.png'
    Image.new('RGB', (60, 300), color=(10, 120, 200)).save(path, 'PNG')
    return path


@pytest.fixture
def icc_png_path(tmp_path):
    """Create a PNG with an embedded sRGB profile."""
    path = tmp_path / 'icc.png'
    profile = ImageCms.ImageCmsProfile(ImageCms.createProfile('sRGB'))
    Image.new('RGB', (32, 32), color=(200, 40, 40)).save(
        path, 'PNG', icc_profile=profile.tobytes()
    )
    return path


@pytest.fixture
def jpeg_orientation_path(tmp_path):
    """Create a JPEG tagged with EXIF orientation 6."""
    path = tmp_path / 'rotated.jpg'
    exif = Image.Exif()
    exif[0x0112] = 6
    Image.new('RGB', (40, 20), color=(0, 0, 0)).save(path, 'JPEG', exif=exif.tobytes())
    return path


@pytest.fixture
def gif_path(tmp_path):
    """Create a three-frame animated GIF with 100/200/300 ms delays."""
    path = tmp_path / 'anim.gif'
    frames = [
        Image.new('RGB', (24, 16), color=color)
        for color in [(255, 0, 0), (0, 255, 0), (0, 0, 255)]
    ]
    frames[0].save(
        path,
        'GIF',
        save_all=True,
        append_images=frames[1:],
        duration=[100, 200, 300],
        loop=0
    )
    return path


@pytest.fixture
def bmp_bytes():
    """Encode a small BMP in memory."""
    out = io.BytesIO()
    Image.new('RGB', (16, 8), color=(1, 2, 3)).save(out, 'BMP')
    return out.getvalue()
