"""Rate-limit and retry a flaky publisher by composing combinators."""

from __future__ import annotations

import asyncio
import random

from loguru import logger

from funcflow import cancellable_debounce, memoize, shared, with_retries


@memoize
def topic_for(event: str) -> str:
    return f"ui/{event.lower()}"


@shared
async def connect() -> str:
    await asyncio.sleep(0.05)
    return "connection-1"


async def publish(event: str, payload: dict[str, str]) -> str:
    connection = await connect()

    async def send() -> str:
        if random.random() < 0.5:
            raise ConnectionError("publisher dropped the message")
        return f"{connection} -> {topic_for(event)}: {payload}"

    return await with_retries(send, {"maxRetries": 5, "delay": 0.01, "backoff": 2})


async def main() -> None:
    logger.enable("funcflow")
    publish_search = cancellable_debounce(lambda text: publish("Search", {"text": text}), delay=0.1)

    # Keystrokes inside the quiet window collapse into one publish of the last text.
    for text in ["c", "ca", "cap", "capi", "capital"]:
        pending = publish_search(text)
        await asyncio.sleep(0.02)

    print(await pending)


if __name__ == "__main__":
    asyncio.run(main())
