import asyncio

from loguru import logger

from fakes import Flaky, RecordingSleep
from funcflow import ScopedTimer, with_retries


def test_logging_is_disabled_by_default():
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    try:
        async def run():
            ScopedTimer(0, lambda: None).cancel()

        asyncio.run(run())
    finally:
        logger.remove(sink_id)

    assert messages == []


def test_lifecycle_records_when_enabled():
    messages: list[str] = []
    logger.enable("funcflow")
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    try:
        async def run():
            await with_retries(Flaky(failures=1), {"delay": 2}, sleep=RecordingSleep())

        asyncio.run(run())
    finally:
        logger.remove(sink_id)
        logger.disable("funcflow")

    assert messages == ["Attempt 1/3 raised RuntimeError, retrying in 2.0s"]
