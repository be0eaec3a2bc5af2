"""
AIOCoalesce store module.
"""

import abc
import logging
from typing import Any, Dict, Mapping

logger = logging.getLogger(__name__)


class Store(abc.ABC):
    """
    Contract for the mutable store a :py:class:`Batcher` writes to.

    A store exposes a single mutating :py:meth:`write` operation and a
    counter of how many times it has been invoked. The batcher only ever
    calls :py:meth:`write`; :py:attr:`write_count` exists so callers can
    observe how many writes a stream of updates actually produced.

    Any object with a compatible ``write`` method can be used with a
    batcher, subclassing is not required.
    """

    @abc.abstractmethod
    def write(self, data: Mapping[Any, Any]) -> None:
        """
        Apply a merged update, overwriting existing keys and adding new
        ones.
        """

    @property
    @abc.abstractmethod
    def write_count(self) -> int:
        """Number of times :py:meth:`write` has been invoked."""


class MemoryStore(Store):
    """
    Store implementation keeping its state in a plain dictionary.

    :param data: Initial state of the store (optional, copied)
    """

    def __init__(self, data: Mapping[Any, Any] = None):
        self._data = dict(data or {})
        self._write_count = 0

    def write(self, data: Mapping[Any, Any]) -> None:
        self._write_count += 1
        self._data.update(data)
        logger.debug(
            f"Write #{self._write_count} applied {len(data)} keys to {self}"
        )

    @property
    def write_count(self) -> int:
        return self._write_count

    @property
    def data(self) -> Dict[Any, Any]:
        """Copy of the current state."""
        return dict(self._data)

    def __repr__(self) -> str:
        return (f'<{type(self).__name__} keys={len(self._data)} '
                f'writes={self._write_count}>')
