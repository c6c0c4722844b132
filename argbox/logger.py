"""
Package logger.

All modules log through the single "argbox" logger. The library never installs
handlers; hosts opt in with logging.basicConfig() or their own configuration.
"""
import logging

logger = logging.getLogger("argbox")

__all__ = ("logger",)
