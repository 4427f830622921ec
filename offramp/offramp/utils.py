"""This module defines helpers shared across the swap components."""
from logging import getLogger as get_logger, LoggerAdapter


class OfframpLoggerAdapter(LoggerAdapter):
    def process(self, msg, kwargs):
        return f"{self.extra['python_path']}: {msg}", kwargs


def getLogger(name):
    return OfframpLoggerAdapter(get_logger(name), extra={"python_path": name})


class RequestGeneration:
    """
    A monotonically increasing counter for one family of asynchronous requests.

    Call :meth:`begin` before awaiting a request and keep the returned value.
    Once the response arrives, apply it only if :meth:`is_current` still returns
    ``True`` for that value. Starting a newer request or calling :meth:`cancel`
    makes every earlier value stale, regardless of the order in which the
    responses come back.
    """

    def __init__(self, name: str):
        self.name = name
        self._value = 0

    def begin(self) -> int:
        self._value += 1
        return self._value

    def is_current(self, generation: int) -> bool:
        return generation == self._value

    def cancel(self):
        self._value += 1

    def __repr__(self):
        return f"<RequestGeneration {self.name}={self._value}>"
