"""Load images into pyvips and summarise their metadata."""

import io
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import pyvips
from PIL import Image

from src.blob import Blob, BlobType
from src.utils.config_loader import VALID_ACCESS_MODES
from .constants import META_DELAY, META_ICC_NAME, META_LOOP, META_OK
from .header import (
    get_image_n_pages,
    get_meta_int,
    get_meta_loader,
    get_meta_orientation,
    get_page_height,
    has_meta,
)
from .image_type import ImageType, determine_image_type

logger = logging.getLogger(__name__)


class ImageLoadError(Exception):
    """Raised when libvips cannot decode an image source."""


def bmp_to_png(data: bytes) -> bytes:
    """Re-encode BMP bytes as PNG for libvips builds without BMP support."""
    with Image.open(io.BytesIO(data)) as img:
        out = io.BytesIO()
        img.save(out, format='PNG')
        return out.getvalue()


class ImageLoader:
    """Decode image blobs with libvips."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize image loader.

        Args:
            config: Configuration dictionary with optional 'loader' section
        """
        loader_config = (config or {}).get('loader', {})
        self.access = loader_config.get('access', 'random')
        self.all_pages = loader_config.get('all_pages', True)
        self.bmp_fallback = loader_config.get('bmp_fallback', True)

        if self.access not in VALID_ACCESS_MODES:
            raise ValueError(f"Invalid access mode: {self.access}")

    def load(self, blob: Blob) -> Tuple[pyvips.Image, ImageType]:
        """Decode a blob.

        Args:
            blob: Image source

        Returns:
            Tuple of decoded image and its detected type

        Raises:
            ImageLoadError: If libvips cannot decode the source
            BlobNotFoundError: If the blob points at a missing file
        """
        name = blob.filepath or '<bytes>'
        data = blob.read_all()
        if not data:
            raise ImageLoadError(f"Empty image source: {name}")

        options = {'access': self.access}
        if self.all_pages and blob.supports_animation():
            options['n'] = -1

        try:
            image = pyvips.Image.new_from_buffer(data, "", **options)
        except pyvips.Error as e:
            if self.bmp_fallback and blob.blob_type is BlobType.BMP:
                try:
                    png = bmp_to_png(data)
                except (OSError, ValueError) as convert_err:
                    logger.warning(f"Could not convert BMP {name} to PNG: {convert_err}")
                else:
                    logger.warning(f"libvips could not load BMP {name}, retrying as PNG")
                    return self.load(Blob.from_bytes(png))
            logger.error(f"Failed to load image {name}: {e}")
            raise ImageLoadError(f"Failed to load image {name}: {e}") from e

        image_type = determine_image_type(image)
        logger.debug(f"Loaded {name}: {image.width}x{image.height} {image_type}")
        return image, image_type

    def load_file(self, path: Union[str, Path]) -> Tuple[pyvips.Image, ImageType]:
        return self.load(Blob.from_file(path))


def describe_image(image: pyvips.Image) -> Dict[str, Any]:
    """Collect the header fields of an image into a plain dict.

    Args:
        image: Decoded image

    Returns:
        Dict with size, loader and animation metadata
    """
    status, loader_name = get_meta_loader(image)

    delay = None
    if has_meta(image, META_DELAY):
        delay = list(image.get(META_DELAY))

    return {
        'width': image.width,
        'height': image.height,
        'bands': image.bands,
        'loader': loader_name if status == META_OK else None,
        'image_type': str(determine_image_type(image)),
        'orientation': get_meta_orientation(image),
        'n_pages': get_image_n_pages(image),
        'page_height': get_page_height(image),
        'has_icc_profile': has_meta(image, META_ICC_NAME),
        'delay': delay,
        'loop': get_meta_int(image, META_LOOP),
    }
