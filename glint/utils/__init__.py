"""
Utility functions for glint.

.. currentmodule:: glint.utils

.. autosummary::
    :toctree: utils/
    :template: ../_templates/custom_layout.rst

    Color
    hex_to_rgb
    enums
    ReadOnlyDict

"""

import os
import logging

from .color import Color, hex_to_rgb  # noqa: F401
from . import enums  # noqa: F401


logger = logging.getLogger("glint")


def _set_log_level():
    # Set default level
    logger.setLevel(logging.WARN)
    # Set user-specified level
    level = os.getenv("GLINT_LOG_LEVEL", "")
    if level:
        try:
            if level.isnumeric():
                logger.setLevel(int(level))
            else:
                logger.setLevel(level.upper())
        except Exception:
            logger.warning(f"Invalid glint log level: {level}")


_set_log_level()


class ReadOnlyDict(dict):
    """A read-only dict, for storing structured data that can be hashed."""

    __slots__ = ["_hash"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Calculate hash in a way that requires any value to also be hashable
        parts = []
        for k in sorted(self.keys()):
            v = self[k]
            parts.append(str(hash(k)))
            parts.append(str(hash(v)))
        self._hash = hash(" ".join(parts))

    def __setitem__(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def __delitem__(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def clear(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def pop(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def popitem(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def setdefault(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def update(self, *args, **kwargs):
        raise TypeError("Cannot modify ReadOnlyDict")

    def __hash__(self):
        return self._hash
