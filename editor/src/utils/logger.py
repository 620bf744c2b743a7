"""Global logging and error handling utilities"""
import sys
import logging

from PyQt5.QtWidgets import QMessageBox

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)

_main_window = None


def configure_logging(verbose=False):
    """Configure root logging once for the application.

    Warnings and errors go to stdout; verbose switches to DEBUG so node,
    gesture and edit-session transitions become visible.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def set_main_window(window):
    """Set the main window reference for showing popups"""
    global _main_window
    _main_window = window


def show_error(title, message):
    """Show a critical popup on the main window, or log it if there is none."""
    if _main_window:
        QMessageBox.critical(_main_window, title, message)
    else:
        logger.error(f"ERROR POPUP (no window): {title} - {message}")


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Handle exceptions with optional popup in release mode

    Args:
        e: The exception to handle
        user_message: User-friendly message to show in popup (optional)
        title: Title for the popup dialog

    In DEBUG_MODE:
        - Just raises the exception (shows full traceback)

    In RELEASE_MODE:
        - Logs the full traceback
        - Shows popup with user message or exception string
        - Then raises the exception
    """
    if DEBUG_MODE:
        raise e

    logger.error(user_message or str(e), exc_info=e)
    show_error(title, user_message if user_message else str(e))
    raise e
