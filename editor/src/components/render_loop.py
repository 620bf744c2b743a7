"""Self-rescheduling repaint loop.

After each painted frame the loop asks whether a node is still selected.
Only then does it schedule the next frame, so with no selection the canvas
goes fully idle.
"""

from PyQt5.QtCore import QObject, QTimer

from constants import RENDER_FRAME_INTERVAL_MS


class RenderLoop(QObject):
	"""Drives repeated repaints while should_continue() holds.

	Args:
		repaint: Callable that requests a repaint (e.g. QWidget.update)
		should_continue: Callable returning True while frames are needed
		interval_ms: Delay between frames
	"""

	def __init__(self, repaint, should_continue, interval_ms=RENDER_FRAME_INTERVAL_MS, parent=None):
		super().__init__(parent)
		self._repaint = repaint
		self._should_continue = should_continue
		self._timer = QTimer(self)
		self._timer.setSingleShot(True)
		self._timer.setInterval(interval_ms)
		self._timer.timeout.connect(self._tick)
		self.frames = 0

	def request_frame(self):
		"""Out-of-band repaint request (input events, plugins, image decode)."""
		self._repaint()

	def frame_rendered(self):
		"""Call at the end of every paint; schedules the next frame if needed."""
		self.frames += 1
		if self._should_continue():
			if not self._timer.isActive():
				self._timer.start()
		else:
			self._timer.stop()

	def _tick(self):
		self._repaint()

	def stop(self):
		self._timer.stop()

	def is_running(self):
		return self._timer.isActive()
