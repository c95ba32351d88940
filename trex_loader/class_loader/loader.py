from __future__ import annotations

"""Resolve, check and execute the source unit for a qualified class name.

``load`` is the callback a host autoload hook invokes for an unresolved
name. Each call is independent: nothing is cached between calls, and a
missing source unit is a fatal error for that call.
"""

import logging
import os
from typing import Any

from trex_loader.class_loader.executor import ModuleExecutor, UnitExecutor
from trex_loader.class_loader.registry import VendorRegistry
from trex_loader.class_loader.resolver import get_class_path
from trex_loader.errors import SourceUnitNotFoundError

_log = logging.getLogger(__name__)

_default_executor = ModuleExecutor()


def load(
    qualified_name: str,
    *,
    executor: UnitExecutor | None = None,
    registry: VendorRegistry | None = None,
) -> Any:
    path = get_class_path(qualified_name, registry)
    if not os.path.isfile(path):
        _log.error("no source unit class=%s path=%s", qualified_name, path)
        raise SourceUnitNotFoundError(qualified_name, path)

    runner = executor or _default_executor
    try:
        value = runner.execute(path, qualified_name)
    except Exception:
        _log.error("Source unit execution failed class=%s path=%s", qualified_name, path, exc_info=True)
        raise
    _log.debug("loaded class=%s path=%s", qualified_name, path)
    return value
