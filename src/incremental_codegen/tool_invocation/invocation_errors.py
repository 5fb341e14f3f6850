"""Errors raised while binding or running the generator."""

from __future__ import annotations

MAX_CAUSE_DEPTH = 2


class GenerationConfigError(Exception):
    """Raised when the generator rejects its arguments or cannot be bound."""


class GenerationToolError(Exception):
    """Raised when the generator itself fails while processing sources.

    `causes` holds the messages of up to two wrapped errors, outermost first.
    """

    def __init__(self, message: str, causes: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.causes = causes[:MAX_CAUSE_DEPTH]

    @classmethod
    def from_exception(cls, exc: BaseException) -> GenerationToolError:
        return cls(str(exc), _cause_messages(exc))


def _cause_messages(exc: BaseException) -> tuple[str, ...]:
    messages: list[str] = []
    current = _nested(exc)
    while current is not None and len(messages) < MAX_CAUSE_DEPTH:
        messages.append(str(current))
        current = _nested(current)
    return tuple(messages)


def _nested(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__
