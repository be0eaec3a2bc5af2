"""
AIOCoalesce utility tests.
"""

import asyncio as aio

import pytest

from aiocoalesce import _util as util  # noqa


class TestUtil:
    def test_resolve_explicit_loop(self):
        loop = aio.new_event_loop()
        try:
            assert util.resolve_loop(loop) is loop
        finally:
            loop.close()

    @pytest.mark.asyncio
    async def test_resolve_running_loop(self):
        assert util.resolve_loop() is aio.get_running_loop()

    def test_resolve_no_loop(self):
        with pytest.raises(RuntimeError) as exc_info:
            util.resolve_loop()
        assert "pass 'loop'" in str(exc_info.value)

    def test_check_callable(self):
        util.check_callable(a=print, b=lambda: None, c=TestUtil)

        for value in [None, 1, 'str', b'bytes']:
            with pytest.raises(TypeError) as exc_info:
                util.check_callable(ok=print, callback=value)
            assert "'callback'" in str(exc_info.value)
