"""Per-invocation timing for ``-v`` runs.

A handler decorated with :func:`traced` gets one span; the pfd round trip
inside it is recorded as a child span via :func:`remote_span`, so verbose
output separates client-side work from time spent waiting on pfd.  When
telemetry is off both are a single ContextVar lookup.
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

from pfm.services.result import CommandResult

_enabled: ContextVar[bool] = ContextVar("pfm_telemetry_enabled", default=False)
_active: ContextVar[Span | None] = ContextVar("pfm_active_span", default=None)


@dataclass
class Span:
    """Wall-clock interval with attributes and nested spans."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.attributes:
            out["attributes"] = dict(self.attributes)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


def enable_telemetry() -> None:
    """Turn span recording on (``AppContext`` does this for ``-v``)."""
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)
    _active.set(None)


@contextmanager
def remote_span(name: str) -> Iterator[Span | None]:
    """Time a pfd call as a child of the active handler span.

    Yields ``None`` when telemetry is off or no handler span is active.
    """
    parent = _active.get() if _enabled.get() else None
    if parent is None:
        yield None
        return

    span = Span(name=name)
    parent.children.append(span)
    try:
        yield span
    except BaseException as exc:
        span.attributes["raised"] = type(exc).__name__
        raise
    finally:
        span.finish()


def _describe(span: Span, result: CommandResult) -> None:
    span.attributes["op"] = result.op
    span.attributes["ok"] = result.ok
    if result.error is not None:
        span.attributes["error_kind"] = str(result.error.kind)


def _emit(span: Span) -> None:
    structlog.get_logger("pfm.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        remote_calls=len(span.children),
        **{k: v for k, v in span.attributes.items() if k in ("ok", "error_kind", "raised")},
    )


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Record a span around a handler and attach it to ``result.meta["telemetry"]``."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        token = _active.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            span.attributes["raised"] = type(exc).__name__
            raise
        finally:
            _active.reset(token)
            span.finish()
            if "raised" in span.attributes:
                _emit(span)

        if not isinstance(result, CommandResult):
            _emit(span)
            return result
        _describe(span, result)
        _emit(span)
        meta = {**(result.meta or {}), "telemetry": span.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper
