import asyncio
from typing import Awaitable, TypeVar

from innerpeace.core.exceptions import StoreTimeoutError
from innerpeace.core.logger import logger

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], seconds: float, context: str) -> T:
    """Await `awaitable` for at most `seconds`.

    On expiry the pending call is cancelled, so a late result can never
    leak back into the caller's state.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError:
        logger.error("Remote store operation timed out after {}s: {}", seconds, context)
        raise StoreTimeoutError(context, seconds) from None
