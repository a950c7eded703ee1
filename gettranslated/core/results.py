"""
Result type handed to every SDK callback.

A single callback shape covers initialization, login, logout and
translation: it receives either a ``Success`` or a ``Failure``.

Usage:
    def on_result(result: Result) -> None:
        if result.ok:
            label.text = result.value
        else:
            print(result.code, result.message)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Union

from gettranslated.core.errors import error_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """Operation completed. ``value`` is the translation for string requests."""
    
    value: Any = None
    
    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Operation failed with an HTTP status (or 0) and a description."""
    
    code: int
    message: str
    
    @property
    def ok(self) -> bool:
        return False
    
    @classmethod
    def from_error(cls, error: BaseException) -> Failure:
        code, message = error_info(error)
        return cls(code=code, message=message)


Result = Union[Success, Failure]
ResultCallback = Callable[[Result], None]


def deliver(callback: ResultCallback | None, result: Result) -> Result:
    """Invoke an optional callback, logging anything it raises."""
    if callback is not None:
        try:
            callback(result)
        except Exception:
            logger.exception("Error in result callback")
    return result
