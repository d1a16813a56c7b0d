"""Unique names for temporaries and labels."""

from __future__ import annotations

import itertools


class NameGenerator:
    """Hands out names made unique by a counter suffix."""

    def __init__(self) -> None:
        self._temporaries = itertools.count()
        self._labels = itertools.count()

    def make_temporary(self, name: str = "tmp") -> str:
        return f"{name}.{next(self._temporaries)}"

    def make_label(self, label: str) -> str:
        return f"{label}.{next(self._labels)}"