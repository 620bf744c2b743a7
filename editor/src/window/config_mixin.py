"""Configuration management for the Canvas Node Editor window"""

import os
import json
import logging

from utils.logger import loggerRaise


logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".canvas_node_editor"


class ConfigMixin:
	"""User configuration file (last used directory)"""

	def _init_config(self, config_dir=None):
		self.config_dir = config_dir or os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
		self.config_file = os.path.join(self.config_dir, "config.json")
		self.last_directory = ""
		self._load_config()

	def _load_config(self):
		"""Load settings from the config file; a missing file keeps defaults"""
		if not os.path.exists(self.config_file):
			return
		try:
			with open(self.config_file, 'r', encoding='utf-8') as f:
				config = json.load(f)
		except json.JSONDecodeError as e:
			# A corrupt config should not stop the editor from starting
			logger.warning(f"Ignoring unreadable config {self.config_file}: {e}")
			return
		except Exception as e:
			loggerRaise(e, "Error loading config")

		last_directory = config.get('last_directory', "")
		if last_directory and os.path.isdir(last_directory):
			self.last_directory = last_directory

	def _save_config(self):
		"""Save settings to the config file"""
		try:
			os.makedirs(self.config_dir, exist_ok=True)
			config = {
				'last_directory': self.last_directory
			}
			with open(self.config_file, 'w', encoding='utf-8') as f:
				json.dump(config, f, indent=2)
		except Exception as e:
			loggerRaise(e, "Error saving config")

	def _remember_directory(self, filepath):
		"""Store the directory of a chosen file for the next dialog"""
		directory = os.path.dirname(os.path.abspath(filepath))
		if directory != self.last_directory:
			self.last_directory = directory
			self._save_config()
