"""Glyph measurement for text nodes.

Wraps QFontMetricsF so node geometry code can ask "how wide is this string"
without knowing about Qt fonts. A QGuiApplication must exist before the
first measurement.
"""

from PyQt5.QtGui import QFont, QFontMetricsF


FONT_WEIGHTS = {
	'normal': QFont.Normal,
	'bold': QFont.Bold,
	'light': QFont.Light,
	'medium': QFont.Medium,
	'black': QFont.Black,
}


def make_font(family, pixel_size, weight='normal'):
	"""Build a QFont sized in pixels.

	Args:
		family: Font family name
		pixel_size: Font size in pixels (float sizes are rounded, min 1)
		weight: Weight name from FONT_WEIGHTS

	Returns:
		QFont
	"""
	font = QFont(family)
	font.setPixelSize(max(1, int(round(pixel_size))))
	font.setWeight(FONT_WEIGHTS.get(weight, QFont.Normal))
	return font


class TextMetrics:
	"""Measures strings for a (family, size, weight) font description."""

	def __init__(self):
		self._metrics_cache = {}

	def _metrics(self, family, size, weight):
		key = (family, size, weight)
		metrics = self._metrics_cache.get(key)
		if metrics is None:
			metrics = QFontMetricsF(make_font(family, size, weight))
			self._metrics_cache[key] = metrics
		return metrics

	def width(self, text, family, size, weight='normal'):
		"""Advance width of text in pixels."""
		return self._metrics(family, size, weight).horizontalAdvance(text)

	def ascent(self, family, size, weight='normal'):
		"""Distance from the top of a line to its baseline."""
		return self._metrics(family, size, weight).ascent()


_default_metrics = None


def default_metrics():
	"""Shared TextMetrics instance (created lazily)."""
	global _default_metrics
	if _default_metrics is None:
		_default_metrics = TextMetrics()
	return _default_metrics
