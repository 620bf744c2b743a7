"""Image export for the canvas.

The editor renders a frame without selection chrome into a QImage; this
module turns that surface into encoded PNG or JPEG bytes through numpy and
PIL, the same path texture loading takes in reverse.
"""

import io
import logging
import os

import numpy as np
from PIL import Image
from PyQt5.QtGui import QImage

from constants import EXPORT_FORMATS, DEFAULT_JPEG_QUALITY


logger = logging.getLogger(__name__)

_PIL_FORMATS = {
    'png': 'PNG',
    'jpeg': 'JPEG',
}


class ExportError(Exception):
    """Raised when a rendered canvas cannot be encoded or written."""


def normalize_format(fmt):
    """Lowercase format name with 'jpg' accepted as 'jpeg'.

    Raises:
        ExportError: If the format is not one of EXPORT_FORMATS
    """
    fmt = (fmt or '').lower()
    if fmt == 'jpg':
        fmt = 'jpeg'
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unsupported export format '{fmt}' (expected one of {', '.join(EXPORT_FORMATS)})")
    return fmt


def qimage_to_array(image):
    """Copy a QImage into an HxWx4 uint8 RGBA array."""
    image = image.convertToFormat(QImage.Format_RGBA8888)
    width, height = image.width(), image.height()
    ptr = image.constBits()
    ptr.setsize(image.sizeInBytes())
    # Rows may be padded past width * 4
    arr = np.frombuffer(ptr, dtype=np.uint8).reshape(height, image.bytesPerLine())
    return arr[:, :width * 4].reshape(height, width, 4).copy()


def encode_image(image, fmt='png', quality=None):
    """Encode a rendered QImage.

    Args:
        image: QImage of the rendered canvas
        fmt: 'png' or 'jpeg'
        quality: JPEG quality 1-95 (ignored for PNG)

    Returns:
        bytes: Encoded file contents
    """
    fmt = normalize_format(fmt)
    if image.isNull():
        raise ExportError("Nothing to export: rendered image is empty")

    pil_image = Image.fromarray(qimage_to_array(image), 'RGBA')
    buffer = io.BytesIO()
    if fmt == 'jpeg':
        # JPEG has no alpha channel
        pil_image = pil_image.convert('RGB')
        pil_image.save(buffer, _PIL_FORMATS[fmt], quality=quality or DEFAULT_JPEG_QUALITY)
    else:
        pil_image.save(buffer, _PIL_FORMATS[fmt])

    data = buffer.getvalue()
    logger.debug(f"Encoded {image.width()}x{image.height()} canvas as {fmt} ({len(data)} bytes)")
    return data


def format_from_path(path, default='png'):
    """Export format implied by a file extension."""
    ext = os.path.splitext(str(path))[1].lstrip('.')
    return normalize_format(ext) if ext else default


def save_image(image, path, fmt=None, quality=None):
    """Encode image and write it to path.

    Raises:
        ExportError: On unsupported format or write failure
    """
    fmt = normalize_format(fmt) if fmt else format_from_path(path)
    data = encode_image(image, fmt, quality)
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise ExportError(f"Could not write '{path}': {e}") from e
    logger.info(f"Exported canvas to {path}")
    return path
