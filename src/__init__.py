"""Command line tools for inspecting and editing libvips image headers."""
