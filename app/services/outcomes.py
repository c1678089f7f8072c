"""
Per-item "try each, keep going" helper used for image re-hosting and
variation creation, where one failure must not abort its siblings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    item: T
    success: bool
    value: Any = None
    error: Optional[BaseException] = None


async def attempt_each(
    items: Iterable[T],
    func: Callable[[T], Awaitable[Any]],
    label: str = "item",
) -> List[Outcome[T]]:
    """
    Await func(item) for every item, strictly in order, one at a time.
    Exceptions are logged and recorded on the Outcome instead of propagating.
    """
    outcomes: List[Outcome[T]] = []
    for item in items:
        try:
            value = await func(item)
        except Exception as exc:
            logger.warning("Skipping %s %r: %s", label, item, exc)
            outcomes.append(Outcome(item=item, success=False, error=exc))
            continue
        outcomes.append(Outcome(item=item, success=True, value=value))
    return outcomes


def succeeded(outcomes: Iterable[Outcome[T]]) -> List[Outcome[T]]:
    return [o for o in outcomes if o.success]


def failed(outcomes: Iterable[Outcome[T]]) -> List[Outcome[T]]:
    return [o for o in outcomes if not o.success]
