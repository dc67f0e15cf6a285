"""Transformation option names.

Cloudinary accepts both single-letter and long option names, so
``{"w": 50}`` and ``{"width": 50}`` describe the same transformation.
"""

from types import MappingProxyType
from typing import Mapping


LONG_NAMES = {
    'a': 'angle',
    'b': 'background',
    'c': 'crop',
    'd': 'default_image',
    'e': 'effect',
    'f': 'fetch_format',
    'g': 'gravity',
    'h': 'height',
    'l': 'overlay',
    'p': 'prefix',
    'q': 'quality',
    'r': 'radius',
    't': 'named_transformation',
    'w': 'width',
    'x': 'x',
    'y': 'y',
}


class OptionNames:
    """Immutable two-way lookup between short and long option names.

    Keys without an entry (``resource_type``, ``secure``, ``type``, or any
    option newer than the table) resolve to themselves in both directions.
    """

    def __init__(self, long_names: Mapping[str, str] = LONG_NAMES) -> None:
        self._longer = MappingProxyType(dict(long_names))
        self._shorter = MappingProxyType({v: k for k, v in long_names.items()})

    def resolve_long(self, key: str) -> str:
        """Return the long name for ``key``, or ``key`` itself."""
        return self._longer.get(key, key)

    def resolve_short(self, key: str) -> str:
        """Return the short name for ``key``, or ``key`` itself."""
        return self._shorter.get(key, key)

    def __len__(self) -> int:
        return len(self._longer)

    def __iter__(self):
        return iter(self._longer.items())


OPTION_NAMES = OptionNames()
