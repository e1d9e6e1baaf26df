"""Timing spans for verbose runs.

``-v`` switches tracing on for the current context. Service methods
wrapped with :func:`traced` then time themselves, collect the
:func:`trace_span` stages run inside them, and hand the tree back under
``ServiceResult.meta["telemetry"]``. With tracing off, both helpers cost
a single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from markfile.services.result import ServiceResult

log = structlog.get_logger("markfile.telemetry")

_tracing: ContextVar[bool] = ContextVar("markfile_tracing", default=False)
_active: ContextVar[Span | None] = ContextVar("markfile_active_span", default=None)


@dataclass
class Span:
    """A timed stage and the stages nested inside it."""

    name: str
    children: list[Span] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    elapsed: float = 0.0

    def stop(self) -> None:
        self.elapsed = time.perf_counter() - self.started

    @property
    def duration_ms(self) -> float:
        return round(self.elapsed * 1000, 2)

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "duration_ms": self.duration_ms}
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


def enable_telemetry() -> None:
    """Turn tracing on for the current context."""
    _tracing.set(True)


@contextmanager
def _activate(span: Span) -> Iterator[Span]:
    token = _active.set(span)
    try:
        yield span
    finally:
        span.stop()
        _active.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time one stage of the enclosing :func:`traced` call.

    Yields None when tracing is off or no traced call is running.
    """
    parent = _active.get() if _tracing.get() else None
    if parent is None:
        yield None
        return
    child = Span(name)
    parent.children.append(child)
    with _activate(child):
        yield child


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time *func* and attach its span tree to the ServiceResult it returns."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _tracing.get():
            return func(*args, **kwargs)

        span = Span(func.__qualname__)
        ok = False
        try:
            with _activate(span):
                result = func(*args, **kwargs)
            ok = result.ok if isinstance(result, ServiceResult) else True
        finally:
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=span.duration_ms,
                ok=ok,
                children=len(span.children),
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper
