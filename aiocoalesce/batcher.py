"""
AIOCoalesce Batcher module.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from .store import Store
from ._util import resolve_loop, check_callable

logger = logging.getLogger(__name__)

Callback = Callable[[], Any]


class Batcher:
    """
    Write-coalescing batcher.

    Updates passed to :py:meth:`set_data` are merged into one pending
    mapping (last write for a key wins) instead of being written to the
    store one at a time. The first update of a batch schedules a deferred
    flush on the next turn of the event loop, so every update made during
    the current synchronous run ends up in a single
    :py:meth:`Store.write` call. :py:meth:`flush` can be called at any
    time to write early; the deferred flush then has nothing left to do.

    Callbacks registered with :py:meth:`upon_completion` are invoked after
    every flush that actually wrote data.

    The optional `loop` argument is the event loop deferred flushes are
    scheduled on. If omitted, the loop running when a batch is started is
    used, and starting a batch outside of a running loop raises
    :py:exc:`RuntimeError`.

    Example::

        batcher = Batcher(store)
        batcher.upon_completion(lambda: print("written"))
        batcher.set_data({'a': 1})
        batcher.set_data({'b': 2})
        batcher.set_data({'a': 3})
        batcher.flush()  # store.write({'a': 3, 'b': 2}), returns 3
    """

    def __init__(self,
                 store: Store,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        """
        :param store: The store to write merged batches to
        :param loop: Event loop for deferred flushes (optional)
        """
        if not callable(getattr(store, 'write', None)):
            raise TypeError("'store' must have a callable 'write' method")
        if not (loop is None or isinstance(loop, asyncio.AbstractEventLoop)):
            raise TypeError("'loop' must be an event loop or None")

        self._store = store
        self._loop = loop
        self._callbacks: List[Callback] = []
        # Deferred flushes armed for an already flushed batch compare
        # against this and do nothing.
        self._generation = 0
        self._reset()

    def _reset(self):
        """Clear the pending batch and re-arm scheduling."""
        self._data: Dict[Any, Any] = {}
        self._operation_count = 0
        self._scheduled = False
        self._generation += 1

    @property
    def pending(self) -> Dict[Any, Any]:
        """Copy of the merged data waiting to be flushed."""
        return dict(self._data)

    @property
    def operation_count(self) -> int:
        """Number of :py:meth:`set_data` calls in the current batch."""
        return self._operation_count

    @property
    def scheduled(self) -> bool:
        """Whether a deferred flush is armed for the current batch."""
        return self._scheduled

    def set_data(self, partial: Mapping[Any, Any]) -> None:
        """
        Merge `partial` into the pending batch.

        Nothing is written to the store here. If this starts a new batch,
        a flush is scheduled for the next turn of the event loop.

        :param partial: Key/value assignments to apply
        :raises TypeError: If `partial` is not a mapping
        :raises RuntimeError:
            If a new batch is started without a running event loop
        """
        if not isinstance(partial, Mapping):
            raise TypeError(
                f"'partial' must be a mapping, got {type(partial).__name__}"
            )

        # Schedule first so a failure leaves the batch untouched
        if not self._scheduled:
            loop = resolve_loop(self._loop)
            loop.call_soon(self._deferred_flush, self._generation)
            self._scheduled = True
            logger.debug(f"Scheduled deferred flush for {self}")

        self._data.update(partial)
        self._operation_count += 1

    def _deferred_flush(self, generation: int) -> None:
        if generation != self._generation:
            return  # Batch was already flushed manually
        self.flush()

    def flush(self) -> int:
        """
        Write the pending batch to the store and notify callbacks.

        The batch is cleared before the write, so a failing write or
        callback never causes the same data to be written again. Errors
        are not caught and propagate to the caller.

        Every call starts a new batch, even when nothing was written:
        after ``set_data({})`` a flush returns 0 but still clears
        :py:attr:`operation_count` and :py:attr:`scheduled`.

        :return: Number of :py:meth:`set_data` calls flushed, 0 if nothing
            was pending
        """
        data, count = self._data, self._operation_count
        self._reset()
        if not data:
            return 0

        logger.debug(
            f"Flushing {count} operations ({len(data)} keys) "
            f"to {self._store!r}"
        )
        self._store.write(data)

        for callback in self._callbacks:
            callback()

        return count

    def upon_completion(self, callback: Callback) -> None:
        """
        Register a callback to invoke after every flush that wrote data.

        Callbacks are called without arguments, in registration order.
        The same callback may be registered more than once.

        :param callback: Zero-argument callable
        """
        check_callable(callback=callback)
        self._callbacks.append(callback)

    def close(self) -> int:
        """Flush anything still pending."""
        return self.flush()

    # Support usage as an async context manager
    async def __aenter__(self) -> 'Batcher':
        """Called upon entering a ``async with`` block"""
        return self

    async def __aexit__(self, exc_type: Type[Exception], *_) -> None:
        """Called upon exiting a ``async with`` block"""
        # Pending updates are written even if the block raised, there is
        # no way to discard them.
        self.close()

    # Deferred flushes need an event loop
    def __enter__(self):
        raise RuntimeError("Use async with")

    def __exit__(self, *_exc):
        raise RuntimeError("Use async with")

    def __repr__(self) -> str:
        return (f'<{type(self).__name__} store={self._store!r} '
                f'pending={self._operation_count} '
                f'scheduled={self._scheduled}>')

    def __del__(self) -> None:
        if getattr(self, '_data', None) and logger is not None:
            # If called at shutdown, module variables may no longer exist.
            logger.warning(
                f"{self} was not flushed, dropping "
                f"{self._operation_count} operations!"
            )
