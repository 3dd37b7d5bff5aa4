import functools
import inspect
import logging
from typing import Callable, Optional

import requests

from .exceptions import BoxAPIError


def supports_callback(func: Optional[Callable] = None, *, legacy_argument: Optional[str] = None):
    """
    Adds an optional keyword-only ``callback`` to a manager operation.

    Without a callback the operation returns its result or raises.
    With one, the callback is called as ``callback(error, result)``: on success
    with ``(None, result)`` (and the result is also returned), on an API or
    transport error with ``(error, None)`` (and None is returned).

    ``legacy_argument`` names a parameter that older callers used to pass the
    callback in. When that argument is callable it is treated as the callback
    and the parameter is reset to None.
    """

    def decorator(operation):
        signature = inspect.signature(operation)

        @functools.wraps(operation)
        def wrapper(*args, callback: Optional[Callable] = None, **kwargs):
            if legacy_argument is not None:
                bound = signature.bind_partial(*args, **kwargs)
                legacy_value = bound.arguments.get(legacy_argument)
                if callable(legacy_value):
                    if callback is None:
                        callback = legacy_value
                    bound.arguments[legacy_argument] = None
                    args, kwargs = bound.args, bound.kwargs

            if callback is None:
                return operation(*args, **kwargs)

            try:
                result = operation(*args, **kwargs)
            except (BoxAPIError, requests.exceptions.RequestException) as e:
                logging.debug(f"{operation.__name__} failed, passing error to callback: {e}")
                callback(e, None)
                return None
            callback(None, result)
            return result

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
