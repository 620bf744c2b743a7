"""Image decoding for image nodes and the canvas background.

Files are decoded with PIL into RGBA, converted through numpy into a QImage.
Decoding from a path is deferred to the next event loop turn so callers can
attach to the one-shot `loaded` signal first; until then the source reports
itself as not ready and a zero size.
"""

import logging

import numpy as np
from PIL import Image
from PyQt5.QtCore import QObject, QTimer, pyqtSignal
from PyQt5.QtGui import QImage


logger = logging.getLogger(__name__)


class ImageLoadError(Exception):
    """Raised when an image file cannot be read or decoded."""


def decode_image_file(path):
    """Decode an image file into an RGBA QImage.

    Args:
        path: Path to any format PIL can read

    Returns:
        QImage in Format_RGBA8888

    Raises:
        ImageLoadError: If the file is missing or not a decodable image
    """
    try:
        with Image.open(path) as img:
            rgba = img.convert('RGBA')
    except (OSError, ValueError) as e:
        raise ImageLoadError(f"Could not decode image '{path}': {e}") from e
    return array_to_qimage(np.array(rgba))


def array_to_qimage(arr):
    """Convert an HxWx4 uint8 RGBA array into a QImage that owns its pixels."""
    arr = np.ascontiguousarray(arr, dtype=np.uint8)
    height, width = arr.shape[:2]
    image = QImage(arr.tobytes(), width, height, width * 4, QImage.Format_RGBA8888)
    # Copy since the bytes buffer is released after this call
    return image.copy()


class ImageSource(QObject):
    """A raster image that may still be decoding.

    `loaded` fires exactly once, after the image becomes ready. `failed`
    fires instead when decoding raises.
    """

    loaded = pyqtSignal()
    failed = pyqtSignal(str)

    def __init__(self, image=None, parent=None):
        super().__init__(parent)
        self._image = None
        self.path = None
        if image is not None:
            self._set_image(image)

    @classmethod
    def from_file(cls, path, parent=None):
        """Start decoding path on the next event loop turn."""
        source = cls(parent=parent)
        source.path = str(path)
        QTimer.singleShot(0, source._decode)
        return source

    @classmethod
    def from_qimage(cls, image, parent=None):
        """Wrap an image that is already decoded."""
        return cls(image, parent)

    def load_now(self):
        """Decode synchronously (no-op if already loaded).

        Raises:
            ImageLoadError: If decoding fails
        """
        if self.is_ready() or self.path is None:
            return
        self._set_image(decode_image_file(self.path))
        self.loaded.emit()

    def _decode(self):
        if self.is_ready():
            return
        try:
            image = decode_image_file(self.path)
        except ImageLoadError as e:
            logger.warning(str(e))
            self.failed.emit(str(e))
            return
        self._set_image(image)
        self.loaded.emit()

    def _set_image(self, image):
        if image.isNull():
            raise ImageLoadError("Image has no pixel data")
        self._image = image
        logger.debug(f"Image ready: {image.width()}x{image.height()} ({self.path or 'in-memory'})")

    def is_ready(self):
        return self._image is not None

    @property
    def image(self):
        return self._image

    @property
    def width(self):
        return self._image.width() if self._image is not None else 0

    @property
    def height(self):
        return self._image.height() if self._image is not None else 0

    def when_ready(self, callback):
        """Run callback now if decoded, otherwise once `loaded` fires."""
        if self.is_ready():
            callback()
            return

        def _once():
            self.loaded.disconnect(_once)
            callback()

        self.loaded.connect(_once)
