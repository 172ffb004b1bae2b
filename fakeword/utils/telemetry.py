"""Structured telemetry for the corpus and model build pipeline."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .observability import StructuredLoggerAdapter, get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class StructuredTelemetry:
    """Collects phase timings, counters and annotations for one build trace."""

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._lock = threading.RLock()
        self._trace_id = 0
        self._listeners: List[TelemetryListener] = list(listeners or [])
        self._reset_state()

    def _reset_state(self) -> None:
        self._phases: List[Dict[str, Any]] = []
        self._counters: Dict[str, float] = {}
        self._metadata: Dict[str, Any] = {}
        self._trace_name: Optional[str] = None

    def _listeners_snapshot(self) -> Tuple[TelemetryListener, ...]:
        with self._lock:
            return tuple(self._listeners)

    def _notify(self, event_type: str, payload: Dict[str, Any]) -> None:
        for listener in self._listeners_snapshot():
            listener(event_type, dict(payload))

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Reset collected state and start a new trace called ``name``."""

        with self._lock:
            self._trace_id += 1
            self._reset_state()
            self._trace_name = name
            trace_id = self._trace_id

        self._notify("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    @contextmanager
    def phase(self, name: str, **metadata: Any) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block as build phase ``name``.

        The yielded dict can be filled with extra metadata while the phase
        runs. A phase that raises is recorded with ``status="failed"``.
        """

        payload: Dict[str, Any] = dict(metadata)
        self._notify("phase_started", {"name": name, "metadata": dict(payload)})
        start = self.now()
        status = "ok"
        try:
            yield payload
        except BaseException:
            status = "failed"
            raise
        finally:
            duration = max(0.0, self.now() - start)
            record = {
                "name": name,
                "duration": duration,
                "status": payload.pop("status", status),
                "metadata": dict(payload),
            }
            with self._lock:
                self._phases.append(record)
            self._notify("phase_finished", record)

    def increment(self, name: str, amount: float = 1.0) -> None:
        value = float(amount)
        with self._lock:
            self._counters[name] = self._counters.get(name, 0.0) + value
            current = self._counters[name]
        self._notify("counter", {"name": name, "delta": value, "value": current})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value
        self._notify("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return deepcopy(
                {
                    "trace_id": self._trace_id,
                    "name": self._trace_name,
                    "phases": self._phases,
                    "counters": self._counters,
                    "metadata": self._metadata,
                }
            )

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that reports build progress through the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[StructuredLoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._default_level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._default_level)
        if not self._logger.isEnabledFor(level):
            return

        name = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        if event_type == "phase_finished":
            message = f"{name} {payload.get('status', 'ok')} in {payload.get('duration', 0.0):.2f}s"
        else:
            message = f"Telemetry {event_type}: {name}"

        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items() if key != "name"})
        self._logger.log(level, message, context=context)


__all__ = ["StructuredTelemetry", "TelemetryListener", "TelemetryLogger"]
