"""Image decoding and export encoding."""
