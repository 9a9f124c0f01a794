"""Image source bytes with lazy format sniffing."""

from enum import Enum
import json
import logging
import mimetypes
from pathlib import Path
from typing import Any, Callable, Optional, Union

logger = logging.getLogger(__name__)

# Bytes peeked from the start of a source for type sniffing.
SNIFF_SIZE = 512

# Sniffing needs at least this many bytes to look at the ftyp box.
MIN_SNIFF_SIZE = 25

JPEG_HEADER = b"\xFF\xD8\xFF"
GIF_HEADER = b"GIF"
WEBP_HEADER = b"WEBP"
PNG_HEADER = b"\x89PNG"
BMP_HEADER = b"BM"
TIFF_II = b"II*\x00"
TIFF_MM = b"MM\x00*"

# https://github.com/strukturag/libheif/blob/master/libheif/heif.cc
FTYP = b"ftyp"
HEIC = b"heic"
MIF1 = b"mif1"
MSF1 = b"msf1"
AVIF = b"avif"


class BlobNotFoundError(FileNotFoundError):
    """Raised when a file-backed blob points at a missing file."""


class BlobType(Enum):
    UNKNOWN = 0
    EMPTY = 1
    JSON = 2
    JPEG = 3
    PNG = 4
    GIF = 5
    WEBP = 6
    AVIF = 7
    HEIF = 8
    TIFF = 9
    BMP = 10


CONTENT_TYPES = {
    BlobType.JSON: "application/json",
    BlobType.JPEG: "image/jpeg",
    BlobType.PNG: "image/png",
    BlobType.GIF: "image/gif",
    BlobType.WEBP: "image/webp",
    BlobType.AVIF: "image/avif",
    BlobType.HEIF: "image/heif",
    BlobType.TIFF: "image/tiff",
    BlobType.BMP: "image/bmp",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def sniff_blob_type(buf: bytes) -> BlobType:
    """Detect the image format from the leading bytes of a source."""
    if not buf:
        return BlobType.EMPTY
    if len(buf) < MIN_SNIFF_SIZE:
        return BlobType.UNKNOWN

    if buf[:3] == JPEG_HEADER:
        return BlobType.JPEG
    if buf[:4] == PNG_HEADER:
        return BlobType.PNG
    if buf[:3] == GIF_HEADER:
        return BlobType.GIF
    if buf[8:12] == WEBP_HEADER:
        return BlobType.WEBP
    if buf[4:8] == FTYP and buf[8:12] == AVIF:
        return BlobType.AVIF
    if buf[4:8] == FTYP and buf[8:12] in (HEIC, MIF1, MSF1):
        return BlobType.HEIF
    if buf[:4] in (TIFF_II, TIFF_MM):
        return BlobType.TIFF
    if buf[:2] == BMP_HEADER:
        return BlobType.BMP
    return BlobType.UNKNOWN


class Blob:
    """Bytes of an image source, sniffed on first access.

    Reading is deferred until one of the accessors needs the data, so a blob
    for a missing file can be created freely and only fails when used.
    """

    def __init__(
        self,
        reader: Optional[Callable[[], bytes]] = None,
        filepath: Optional[str] = None,
        blob_type: Optional[BlobType] = None,
        err: Optional[Exception] = None
    ):
        """Initialize blob.

        Args:
            reader: Callable returning the full source bytes. None for an
                empty blob.
            filepath: Path the bytes come from, if any
            blob_type: Known type, skips sniffing
            err: Error recorded at construction time
        """
        self._reader = reader
        self._filepath = filepath
        self._blob_type = blob_type
        self._err = err
        self._content_type: Optional[str] = None
        self._buf: Optional[bytes] = None
        self._initialized = False

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Blob":
        path = Path(path)
        if not path.is_file():
            err = BlobNotFoundError(f"Image file not found: {path}")
            return cls(filepath=str(path), err=err)
        return cls(reader=path.read_bytes, filepath=str(path))

    @classmethod
    def from_bytes(cls, data: bytes) -> "Blob":
        data = bytes(data)
        return cls(reader=lambda: data)

    @classmethod
    def from_json(cls, value: Any) -> "Blob":
        data = json.dumps(value).encode("utf-8")
        return cls(reader=lambda: data, blob_type=BlobType.JSON)

    def _init(self) -> None:
        if self._initialized:
            return
        self._initialized = True

        if self._err is not None:
            return
        if self._reader is None:
            self._buf = b""
            self._blob_type = BlobType.EMPTY
            return

        try:
            self._buf = self._reader()
        except OSError as e:
            logger.error(f"Failed to read blob {self._filepath or '<bytes>'}: {e}")
            self._err = e
            self._buf = b""
            return

        if not self._buf:
            self._blob_type = BlobType.EMPTY
        elif self._blob_type is None:
            self._blob_type = sniff_blob_type(self._buf[:SNIFF_SIZE])

        logger.debug(
            f"Blob {self._filepath or '<bytes>'}: {len(self._buf)} bytes, "
            f"type {self._blob_type.name}"
        )

    @property
    def err(self) -> Optional[Exception]:
        self._init()
        return self._err

    @property
    def filepath(self) -> Optional[str]:
        return self._filepath

    @property
    def blob_type(self) -> BlobType:
        self._init()
        return self._blob_type or BlobType.UNKNOWN

    @property
    def size(self) -> int:
        self._init()
        return len(self._buf or b"")

    def is_empty(self) -> bool:
        return self.blob_type is BlobType.EMPTY

    def supports_animation(self) -> bool:
        return self.blob_type in (BlobType.GIF, BlobType.WEBP)

    def sniff(self) -> bytes:
        """Return the leading bytes used for type detection."""
        self._init()
        return (self._buf or b"")[:SNIFF_SIZE]

    @property
    def content_type(self) -> str:
        if self._content_type:
            return self._content_type

        blob_type = self.blob_type
        if blob_type in CONTENT_TYPES:
            return CONTENT_TYPES[blob_type]
        if self._filepath:
            guessed, _ = mimetypes.guess_type(self._filepath)
            if guessed:
                return guessed
        return DEFAULT_CONTENT_TYPE

    def set_content_type(self, content_type: str) -> None:
        self._content_type = content_type

    def read_all(self) -> bytes:
        """Return the full source bytes.

        Raises:
            BlobNotFoundError: If the blob points at a missing file
            OSError: If the source could not be read
        """
        self._init()
        if self._err is not None:
            raise self._err
        return self._buf
