"""Image format detection from the loader recorded on a decoded image."""

from enum import Enum
import logging

import pyvips

from .constants import META_HEIF_COMPRESSION, META_OK
from .header import get_meta_loader

logger = logging.getLogger(__name__)


class ImageType(Enum):
    """Format of a decoded image, as far as the loader that read it tells."""
    UNKNOWN = 0
    JPEG = 1
    PNG = 2
    GIF = 3
    WEBP = 4
    HEIF = 5
    AVIF = 6
    TIFF = 7
    SVG = 8
    PDF = 9
    BMP = 10
    MAGICK = 11
    JP2K = 12
    JXL = 13

    def __str__(self) -> str:
        return self.name.lower()


# Loader nicknames carry a suffix for the kind of input they read from,
# e.g. "pngload_buffer" or "jpegload_source".
_LOADER_SUFFIXES = ("_buffer", "_source", "_file")

_LOADER_TYPES = {
    "jpegload": ImageType.JPEG,
    "pngload": ImageType.PNG,
    "gifload": ImageType.GIF,
    "webpload": ImageType.WEBP,
    "heifload": ImageType.HEIF,
    "tiffload": ImageType.TIFF,
    "svgload": ImageType.SVG,
    "pdfload": ImageType.PDF,
    "magickload": ImageType.MAGICK,
    "jp2kload": ImageType.JP2K,
    "jxlload": ImageType.JXL,
    "bmpload": ImageType.BMP,
}

_ANIMATED_TYPES = (ImageType.GIF, ImageType.WEBP)


def image_type_from_loader(loader_name: str) -> ImageType:
    """Map a libvips loader nickname to an ImageType."""
    if not loader_name:
        return ImageType.UNKNOWN

    base = loader_name
    for suffix in _LOADER_SUFFIXES:
        if base.endswith(suffix):
            base = base[:-len(suffix)]
            break

    return _LOADER_TYPES.get(base, ImageType.UNKNOWN)


def determine_image_type(image: pyvips.Image) -> ImageType:
    """Work out the format of a decoded image from its loader name.

    HEIF loads compressed with AV1 are reported as AVIF.
    """
    status, loader_name = get_meta_loader(image)
    if status != META_OK:
        return ImageType.UNKNOWN

    image_type = image_type_from_loader(loader_name)
    if (image_type is ImageType.HEIF
            and image.get_typeof(META_HEIF_COMPRESSION) != 0
            and image.get(META_HEIF_COMPRESSION) == "av1"):
        image_type = ImageType.AVIF

    logger.debug(f"Loader {loader_name} -> {image_type}")
    return image_type


def supports_animation(image_type: ImageType) -> bool:
    return image_type in _ANIMATED_TYPES
