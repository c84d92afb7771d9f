from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Sequence, TypeVar, Union

from app.core.exceptions import AppError
from app.core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


async def fetch_each(
    ids: Sequence[str],
    fetch: Callable[[str], Awaitable[T]],
    id_key: str,
) -> List[Union[T, Dict[str, Any]]]:
    """Fetch every id concurrently; a failed item becomes ``{id_key: id, "error": message}``.

    The result always has one entry per id, in the same order. Only AppError
    failures are captured; anything else is a bug and propagates.
    """
    results = await asyncio.gather(*(fetch(item_id) for item_id in ids), return_exceptions=True)

    processed: List[Union[T, Dict[str, Any]]] = []
    for item_id, result in zip(ids, results):
        if isinstance(result, AppError):
            logger.warning("Error fetching %s %s: %s", id_key, item_id, result)
            processed.append({id_key: item_id, "error": result.message or str(result)})
        elif isinstance(result, BaseException):
            raise result
        else:
            processed.append(result)
    return processed
