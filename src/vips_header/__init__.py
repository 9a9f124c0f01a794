"""Read and write libvips image header metadata."""

from .header import (
    has_meta,
    get_meta_int,
    remove_icc_profile,
    get_meta_orientation,
    get_image_n_pages,
    set_image_n_pages,
    get_page_height,
    set_page_height,
    get_meta_loader,
    set_image_delay
)
from .image_type import ImageType, determine_image_type, image_type_from_loader, supports_animation
from .loader import ImageLoader, ImageLoadError, describe_image

__all__ = [
    'has_meta',
    'get_meta_int',
    'remove_icc_profile',
    'get_meta_orientation',
    'get_image_n_pages',
    'set_image_n_pages',
    'get_page_height',
    'set_page_height',
    'get_meta_loader',
    'set_image_delay',
    'ImageType',
    'determine_image_type',
    'image_type_from_loader',
    'supports_animation',
    'ImageLoader',
    'ImageLoadError',
    'describe_image'
]
