"""Main window mixins: menu bar actions and user configuration."""

from .config_mixin import ConfigMixin
from .menu_mixin import MenuMixin

__all__ = ['ConfigMixin', 'MenuMixin']
