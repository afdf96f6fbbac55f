"""Remote-first, local-fallback composition."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from nutritrack.config import get_settings


logger = logging.getLogger(__name__)

T = TypeVar("T")


def _non_empty(result: Any) -> bool:
    return bool(result)


async def with_fallback(
    remote: Optional[Callable[[], Awaitable[T]]],
    local: Callable[[], T],
    *,
    label: str,
    timeout: Optional[float] = None,
    accept: Callable[[T], bool] = _non_empty,
) -> Tuple[T, str]:
    """
    Run the remote strategy, falling back to the local one.

    The remote strategy gets a single attempt bounded by ``timeout``. Any
    exception, a timeout, or a result rejected by ``accept`` sends the
    request to ``local``. Returns the result and which strategy produced it
    (``"ai"`` or ``"local"``).
    """
    if remote is not None:
        timeout = timeout if timeout is not None else get_settings().ai_timeout_seconds
        try:
            result = await asyncio.wait_for(remote(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("%s: AI call timed out after %.1fs, using local fallback", label, timeout)
        except Exception as e:
            logger.warning("%s: AI call failed, using local fallback: %s", label, e)
        else:
            if accept(result):
                logger.debug("%s: using AI result", label)
                return result, "ai"
            logger.info("%s: AI returned nothing usable, using local fallback", label)

    return local(), "local"
