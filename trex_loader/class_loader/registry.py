from __future__ import annotations

"""Process-wide vendor registry.

A vendor is a named source tree. The registry maps each vendor name to the
relative path (under the base directory) that its classes live in. There is
exactly one registry per process; obtain it with ``get_vendor_registry()``.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple, Union

from trex_loader.core import diagnostics
from trex_loader.core.config import get_base_dir, settings
from trex_loader.utils.rwlock import ReadWriteLock

_log = logging.getLogger(__name__)

VendorSpec = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


@dataclass(frozen=True, slots=True)
class VendorEntry:
    name: str
    source_path: str


def _coerce_vendor_pairs(raw: VendorSpec) -> Dict[str, str]:
    """Collapse a mapping or pair iterable into a dict, last value per name wins."""
    if isinstance(raw, Mapping):
        return {str(k): str(v) for k, v in raw.items()}
    pairs: Dict[str, str] = {}
    for item in raw:
        name, source_path = item
        pairs[str(name)] = str(source_path)
    return pairs


def _first_segment(source_path: str) -> str:
    return source_path.split(os.sep, 1)[0]


class VendorRegistry:
    _instance: "VendorRegistry | None" = None
    _instance_lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        raise TypeError("VendorRegistry is a process-wide singleton; use VendorRegistry.get_instance()")

    @classmethod
    def get_instance(cls) -> "VendorRegistry":
        instance = cls._instance
        if instance is not None:
            return instance
        with cls._instance_lock:
            if cls._instance is None:
                instance = object.__new__(cls)
                instance._setup()
                cls._instance = instance
        return cls._instance

    def _setup(self) -> None:
        self._vendors: Dict[str, str] = {}
        self._lock = ReadWriteLock()
        self._register_defaults()

    def _register_defaults(self) -> None:
        for name, source_path in settings.default_vendors.items():
            self._store(name, source_path)

    def __copy__(self):
        raise TypeError("VendorRegistry cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("VendorRegistry cannot be copied")

    def __reduce__(self):
        raise TypeError("VendorRegistry cannot be pickled")

    # ------------------------------------------------------------------ writes

    def _store(self, name: str, source_path: str) -> str | None:
        """Insert one vendor; return the stored path or None if the name is taken.

        Caller holds the write lock (or is still inside _setup). Notices are
        left to the caller so observers never run under the lock.
        """
        if not name:
            raise ValueError("vendor name is required")
        if name in self._vendors:
            _log.debug("vendor %s already registered at %s", name, self._vendors[name])
            return None
        if not source_path.endswith(os.sep):
            source_path += os.sep
        self._vendors[name] = source_path
        _log.debug("registered vendor %s source_path=%s", name, source_path)
        return source_path

    @staticmethod
    def _notify_missing_separator(original: str, stored: str | None) -> None:
        if stored is None or original == stored:
            return
        diagnostics.notice(
            diagnostics.VENDOR_SOURCE_PATH_SEPARATOR,
            f"Vendor source path must end with {os.sep} (got {original})",
            subject=original,
        )

    def add_vendor(self, name: str, source_path: str) -> bool:
        with self._lock.write():
            stored = self._store(name, source_path)
        self._notify_missing_separator(source_path, stored)
        return stored is not None

    def add_vendors(self, vendors: VendorSpec) -> bool:
        pairs = _coerce_vendor_pairs(vendors)
        # Reject the whole batch before any write.
        if any(not name for name in pairs):
            raise ValueError("vendor name is required")
        results = []
        with self._lock.write():
            for name, source_path in pairs.items():
                results.append((source_path, self._store(name, source_path)))
        for original, stored in results:
            self._notify_missing_separator(original, stored)
        return True

    def remove_vendor(self, name: str) -> bool:
        with self._lock.write():
            removed = self._vendors.pop(name, None) is not None
        if removed:
            _log.debug("removed vendor %s", name)
        return removed

    def reset(self) -> None:
        with self._lock.write():
            self._vendors.clear()
            self._register_defaults()

    # ------------------------------------------------------------------- reads

    def has_vendor(self, name: str) -> bool:
        with self._lock.read():
            return name in self._vendors

    def get_source_path(self, name: str) -> str:
        with self._lock.read():
            return self._vendors.get(name, '')

    def get_root_dir(self, name: str) -> str:
        source_path = self.get_source_path(name)
        if not source_path:
            return ''
        return f"{get_base_dir()}{_first_segment(source_path)}{os.sep}"

    def get_real_path(self, name: str) -> str:
        source_path = self.get_source_path(name)
        if not source_path:
            return ''
        candidate = get_base_dir() + source_path
        if not os.path.exists(candidate):
            return ''
        return os.path.realpath(candidate) + os.sep

    def vendors(self) -> Tuple[VendorEntry, ...]:
        with self._lock.read():
            items = sorted(self._vendors.items())
        return tuple(VendorEntry(name=n, source_path=p) for n, p in items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_vendor(name)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._vendors)


def get_vendor_registry() -> VendorRegistry:
    return VendorRegistry.get_instance()
