"""
Wraps store and session calls so the UI always gets an ActionResult back.
"""
from typing import Any, Callable

from loguru import logger
from pydantic import BaseModel

from core.errors import CampfireError, UserCancelled


class ActionResult(BaseModel):
    ok: bool = False
    value: Any = None
    error: str | None = None
    cancelled: bool = False


def run_action(label: str, fn: Callable, *args, **kwargs) -> ActionResult:
    try:
        value = fn(*args, **kwargs)
    except UserCancelled:
        logger.debug(f'{label}: cancelled by user')
        return ActionResult(cancelled=True)
    except CampfireError as e:
        logger.warning(f'{label} failed: {e}')
        return ActionResult(error=str(e))
    return ActionResult(ok=True, value=value)
