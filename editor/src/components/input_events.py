"""Toolkit-neutral input events routed through the canvas editor.

CanvasWidget converts Qt mouse/key events into these so the editor, the
gesture machine and plugins can be driven directly from tests.
"""

from dataclasses import dataclass

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QKeySequence


# Named keys (anything else is a single printable character)
KEY_ENTER = 'Enter'
KEY_BACKSPACE = 'Backspace'
KEY_DELETE = 'Delete'
KEY_ESCAPE = 'Escape'
KEY_LEFT = 'ArrowLeft'
KEY_RIGHT = 'ArrowRight'
KEY_UP = 'ArrowUp'
KEY_DOWN = 'ArrowDown'
KEY_HOME = 'Home'
KEY_END = 'End'
KEY_PASTE = 'Paste'

QT_KEY_NAMES = {
	Qt.Key_Return: KEY_ENTER,
	Qt.Key_Enter: KEY_ENTER,
	Qt.Key_Backspace: KEY_BACKSPACE,
	Qt.Key_Delete: KEY_DELETE,
	Qt.Key_Escape: KEY_ESCAPE,
	Qt.Key_Left: KEY_LEFT,
	Qt.Key_Right: KEY_RIGHT,
	Qt.Key_Up: KEY_UP,
	Qt.Key_Down: KEY_DOWN,
	Qt.Key_Home: KEY_HOME,
	Qt.Key_End: KEY_END,
}


@dataclass
class PointerEvent:
	"""Pointer position in canvas-local pixels (origin top-left)."""
	x: float
	y: float
	shift: bool = False
	ctrl: bool = False


@dataclass
class KeyEvent:
	"""Key identity plus modifier flags.

	key is either a single printable character or one of the KEY_* names.
	text carries the pasted block for KEY_PASTE.
	"""
	key: str
	text: str = ""
	ctrl: bool = False
	shift: bool = False

	def is_printable(self):
		return len(self.key) == 1 and self.key.isprintable()


def pointer_event_from_qt(event):
	"""Build a PointerEvent from a QMouseEvent."""
	modifiers = event.modifiers()
	pos = event.localPos()
	return PointerEvent(
		pos.x(), pos.y(),
		shift=bool(modifiers & Qt.ShiftModifier),
		ctrl=bool(modifiers & Qt.ControlModifier),
	)


def key_event_from_qt(event, clipboard_text=None):
	"""Build a KeyEvent from a QKeyEvent, or None for keys the editor ignores.

	Args:
		event: QKeyEvent
		clipboard_text: Clipboard contents, used when event is the paste shortcut
	"""
	modifiers = event.modifiers()
	ctrl = bool(modifiers & Qt.ControlModifier)
	shift = bool(modifiers & Qt.ShiftModifier)

	if event.matches(QKeySequence.Paste):
		return KeyEvent(KEY_PASTE, text=clipboard_text or "", ctrl=ctrl, shift=shift)

	name = QT_KEY_NAMES.get(event.key())
	if name:
		return KeyEvent(name, ctrl=ctrl, shift=shift)

	text = event.text()
	if len(text) == 1 and text.isprintable() and not ctrl:
		return KeyEvent(text, ctrl=ctrl, shift=shift)
	return None
