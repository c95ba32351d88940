from __future__ import annotations

"""Non-fatal diagnostics raised while registering vendors and resolving paths.

Notices and warnings never interrupt control flow. Each one is logged and
handed to every registered observer so tests and tooling can inspect them.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List

_log = logging.getLogger("trex_loader.diagnostics")

NOTICE = "notice"
WARNING = "warning"

VENDOR_SOURCE_PATH_SEPARATOR = "vendor_source_path_separator"
VENDOR_NOT_RECORDED = "vendor_not_recorded"

_LOG_LEVELS = {NOTICE: logging.INFO, WARNING: logging.WARNING}


@dataclass(frozen=True, slots=True)
class Diagnostic:
    level: str
    code: str
    message: str
    subject: str = ""


DiagnosticObserver = Callable[[Diagnostic], None]

_OBSERVERS: Dict[str, DiagnosticObserver] = {}
_OBSERVERS_LOCK = threading.Lock()


def register_diagnostic_observer(name: str, callback: DiagnosticObserver) -> None:
    """Register a named observer for every emitted diagnostic.

    Later registrations using the same name replace the previous observer.
    """

    if not name:
        raise ValueError("diagnostic observer name is required")
    if not callable(callback):
        raise TypeError("diagnostic observer must be callable")
    with _OBSERVERS_LOCK:
        _OBSERVERS[name] = callback


def unregister_diagnostic_observer(name: str) -> bool:
    with _OBSERVERS_LOCK:
        return _OBSERVERS.pop(name, None) is not None


def emit(diagnostic: Diagnostic) -> Diagnostic:
    _log.log(_LOG_LEVELS.get(diagnostic.level, logging.WARNING), diagnostic.message)
    with _OBSERVERS_LOCK:
        observers = list(_OBSERVERS.items())
    for name, observer in observers:
        try:
            observer(diagnostic)
        except Exception:
            _log.exception("diagnostic observer %s failed", name)
    return diagnostic


def notice(code: str, message: str, subject: str = "") -> Diagnostic:
    return emit(Diagnostic(level=NOTICE, code=code, message=message, subject=subject))


def warning(code: str, message: str, subject: str = "") -> Diagnostic:
    return emit(Diagnostic(level=WARNING, code=code, message=message, subject=subject))


class DiagnosticCollector:
    """Thread-safe list of diagnostics, usable directly as an observer."""

    def __init__(self) -> None:
        self._records: List[Diagnostic] = []
        self._lock = threading.Lock()

    def __call__(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._records.append(diagnostic)

    @property
    def records(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._records)

    @property
    def notices(self) -> List[Diagnostic]:
        return [d for d in self.records if d.level == NOTICE]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.records if d.level == WARNING]

    def codes(self) -> List[str]:
        return [d.code for d in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


_capture_counter = 0
_capture_lock = threading.Lock()


@contextmanager
def capture_diagnostics() -> Iterator[DiagnosticCollector]:
    global _capture_counter

    with _capture_lock:
        _capture_counter += 1
        name = f"capture-{_capture_counter}"
    collector = DiagnosticCollector()
    register_diagnostic_observer(name, collector)
    try:
        yield collector
    finally:
        unregister_diagnostic_observer(name)
