"""
Structured event sink for the date engine.

The engine reports what it does through a ``ValidationObserver`` handed to it
at construction time. Results never depend on the observer: a ``NullObserver``
yields exactly the same validation output as a recording one.

Event shape:
  level     = debug | info | warn | error
  category  = validation | parsing | config | performance | edge-case
  operation = short snake_case name of what happened
  data      = JSON-friendly payload
  duration  = seconds, for timed operations
  error     = exception text, when something failed
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Protocol

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

MAX_RECORDED_EVENTS = 1000


class ValidationObserver(Protocol):
    def log(
        self,
        level: str,
        category: str,
        operation: str,
        data: Optional[Dict[str, Any]] = None,
        duration: Optional[float] = None,
        error: Optional[str] = None,
    ) -> None:
        ...


class NullObserver:
    def log(self, level, category, operation, data=None, duration=None, error=None) -> None:
        return None


class LoggingObserver:
    """Forwards events to stdlib logging under the ``resume_dates`` logger tree."""

    def __init__(self, base_logger: Optional[logging.Logger] = None):
        self._logger = base_logger or logger

    def log(self, level, category, operation, data=None, duration=None, error=None) -> None:
        message = f"[{category}] {operation}"
        if data:
            message += f" {data}"
        if duration is not None:
            message += f" ({duration * 1000:.1f} ms)"
        if error:
            message += f" error={error}"
        self._logger.log(_LOG_LEVELS.get(level, logging.INFO), message)


@dataclass
class ObservedEvent:
    timestamp: str
    level: str
    category: str
    operation: str
    data: Dict[str, Any] = field(default_factory=dict)
    duration: Optional[float] = None
    error: Optional[str] = None


class RecordingObserver:
    """Keeps the most recent events in memory and summarizes validation runs."""

    def __init__(self, max_events: int = MAX_RECORDED_EVENTS):
        self.max_events = max_events
        self.events: List[ObservedEvent] = []

    def log(self, level, category, operation, data=None, duration=None, error=None) -> None:
        self.events.append(
            ObservedEvent(
                timestamp=datetime.now(timezone.utc).isoformat(),
                level=level,
                category=category,
                operation=operation,
                data=dict(data or {}),
                duration=duration,
                error=error,
            )
        )
        if len(self.events) > self.max_events:
            del self.events[: len(self.events) - self.max_events]

    def events_for(self, operation: str) -> List[ObservedEvent]:
        return [event for event in self.events if event.operation == operation]

    def events_in(self, category: str) -> List[ObservedEvent]:
        return [event for event in self.events if event.category == category]

    def analytics(self) -> Dict[str, Any]:
        """
        Summarize recorded validation runs.

        Returns total/successful/failed run counts, the mean duration of timed
        runs, and how often each issue type was reported.
        """
        runs = self.events_for("validate_resume_dates")
        failed = [event for event in runs if event.error]
        durations = [event.duration for event in runs if event.duration is not None]

        issue_types: Dict[str, int] = {}
        for event in runs:
            for issue_type, count in event.data.get("issue_types", {}).items():
                issue_types[issue_type] = issue_types.get(issue_type, 0) + count

        return {
            "total_validations": len(runs),
            "successful_validations": len(runs) - len(failed),
            "failed_validations": len(failed),
            "average_duration": sum(durations) / len(durations) if durations else 0.0,
            "issue_types": issue_types,
            "edge_cases": len(self.events_in("edge-case")),
        }

    def clear(self) -> None:
        self.events.clear()


@contextmanager
def timed(observer: ValidationObserver, category: str, operation: str, data: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
    """Report ``operation`` with its wall-clock duration once the block exits.

    The yielded dict is the event payload; callers may add to it inside the block.
    """
    payload: Dict[str, Any] = dict(data or {})
    started = time.perf_counter()
    try:
        yield payload
    except Exception as exc:
        observer.log("error", category, operation, payload, time.perf_counter() - started, str(exc))
        raise
    observer.log("info", category, operation, payload, time.perf_counter() - started)
