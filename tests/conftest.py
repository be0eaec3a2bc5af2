from typing import Callable, List
from unittest import mock

import pytest

from aiocoalesce import Batcher, MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def batcher(store: MemoryStore) -> Batcher:
    return Batcher(store)


@pytest.fixture
def register_callbacks(batcher: Batcher) -> Callable[[int], List[mock.Mock]]:
    def register(count: int) -> List[mock.Mock]:
        callbacks = [mock.Mock(name=f'callback_{i}') for i in range(count)]
        for callback in callbacks:
            batcher.upon_completion(callback)
        return callbacks
    return register
