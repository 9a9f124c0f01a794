"""Accessors for image metadata held on a pyvips image.

Every function borrows the image it is given: nothing here copies, keeps or
releases it. Getters fall back to 0 when a field is absent, except
``get_meta_loader`` which reports a status code instead.
"""

import logging
from typing import Optional, Sequence, Tuple

import pyvips

from .constants import (
    META_DELAY,
    META_ERROR,
    META_ICC_NAME,
    META_LOADER,
    META_N_PAGES,
    META_OK,
    META_ORIENTATION,
    META_PAGE_HEIGHT,
)

logger = logging.getLogger(__name__)

_STRING_TYPES = (pyvips.GValue.gstr_type, pyvips.GValue.refstr_type)


def has_meta(image: pyvips.Image, name: str) -> bool:
    """Return True if the metadata field exists on the image."""
    return image.get_typeof(name) != 0


def get_meta_int(image: pyvips.Image, name: str) -> Optional[int]:
    """Read an int field, or None when it is absent or not an int.

    Unlike the getters below, this tells "absent" apart from "present with
    value 0".
    """
    if image.get_typeof(name) != pyvips.GValue.gint_type:
        return None
    return image.get(name)


def remove_icc_profile(image: pyvips.Image) -> bool:
    """Remove the embedded ICC profile.

    Returns:
        True once the image carries no ICC profile, including when it had
        none to begin with
    """
    removed = image.remove(META_ICC_NAME)
    if removed:
        logger.debug("Removed ICC profile")
    return not has_meta(image, META_ICC_NAME)


def get_meta_orientation(image: pyvips.Image) -> int:
    """Return the EXIF orientation, or 0 when the image has none.

    The stored value is returned as is; the usual 1-8 range is not checked.
    """
    orientation = get_meta_int(image, META_ORIENTATION)
    return orientation if orientation is not None else 0


# https://www.libvips.org/API/current/libvips-header.html#vips-image-get-n-pages
def get_image_n_pages(image: pyvips.Image) -> int:
    return image.get_n_pages()


def set_image_n_pages(image: pyvips.Image, n_pages: int) -> None:
    image.set_type(pyvips.GValue.gint_type, META_N_PAGES, n_pages)


# https://www.libvips.org/API/current/libvips-header.html#vips-image-get-page-height
def get_page_height(image: pyvips.Image) -> int:
    return image.get_page_height()


def set_page_height(image: pyvips.Image, height: int) -> None:
    image.set_type(pyvips.GValue.gint_type, META_PAGE_HEIGHT, height)


def get_meta_loader(image: pyvips.Image) -> Tuple[int, Optional[str]]:
    """Return the name of the loader that decoded the image.

    Returns:
        ``(META_OK, name)`` on success, ``(META_ERROR, None)`` when the
        field is missing or is not a string. Check the status before
        using the name.
    """
    if image.get_typeof(META_LOADER) not in _STRING_TYPES:
        logger.debug("Image has no loader name")
        return META_ERROR, None
    return META_OK, image.get(META_LOADER)


def set_image_delay(
    image: pyvips.Image,
    delays: Sequence[int],
    n: Optional[int] = None
) -> None:
    """Store per-frame animation delays (milliseconds).

    Args:
        image: Image to update
        delays: Delay for each frame
        n: Number of entries of ``delays`` to store, all when None

    Raises:
        ValueError: If ``n`` is negative or larger than ``delays``
    """
    if n is None:
        n = len(delays)
    if n < 0 or n > len(delays):
        raise ValueError(f"Delay count {n} out of range for {len(delays)} values")

    image.set_type(
        pyvips.GValue.array_int_type,
        META_DELAY,
        [int(delay) for delay in delays[:n]]
    )
