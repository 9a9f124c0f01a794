"""Well-known libvips metadata field names and status codes."""

# Metadata field names, as defined by libvips (VIPS_META_*).
META_ICC_NAME = "icc-profile-data"
META_ORIENTATION = "orientation"
META_N_PAGES = "n-pages"
META_PAGE_HEIGHT = "page-height"
META_LOADER = "vips-loader"
META_DELAY = "delay"
META_LOOP = "loop"
META_HEIF_COMPRESSION = "heif-compression"

# Status codes returned by accessors that can fail (libvips convention).
META_OK = 0
META_ERROR = -1
