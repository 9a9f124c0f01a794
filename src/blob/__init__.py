"""Image source bytes and format sniffing."""

from .blob import Blob, BlobType, BlobNotFoundError, sniff_blob_type

__all__ = [
    'Blob',
    'BlobType',
    'BlobNotFoundError',
    'sniff_blob_type'
]
