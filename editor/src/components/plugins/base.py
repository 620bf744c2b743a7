"""Plugin base class for optional canvas editor behaviors.

Plugins are kept in an ordered list on the editor and called at fixed
extension points. Every hook is a no-op here, so a plugin only overrides
what it needs.
"""


class CanvasEditorPlugin:
	"""Hook interface for editor collaborators (color picker, text editing, ...)."""

	def init(self, editor):
		"""Called once when the plugin is registered with editor.use()."""
		self.editor = editor

	def destroy(self):
		"""Called once when the plugin is removed; release timers here."""

	def on_add_node(self, node, editor):
		"""A node was added (it is already the active node)."""

	def on_remove_node(self, node, editor):
		"""A node was removed from the editor."""

	def on_render(self, painter, editor):
		"""Draw on top of the nodes, once per frame, before selection chrome."""

	def on_pointer_capture(self, event, editor):
		"""Runs before default hit testing.

		Returns:
			bool: True to consume the press (editor skips its own handling)
		"""
		return False

	def on_pointer_down(self, event, editor):
		"""Runs after the editor handled a press."""

	def on_pointer_move(self, event, editor):
		pass

	def on_pointer_up(self, event, editor):
		pass

	def on_double_click(self, event, editor):
		pass

	def on_key_press(self, event, editor):
		"""Returns True to consume the key."""
		return False
