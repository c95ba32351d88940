from __future__ import annotations

import importlib.util
import logging
import sys
from typing import Any, Protocol

from trex_loader.class_loader.resolver import split_qualified_name
from trex_loader.errors import UnitExecutionError

_log = logging.getLogger(__name__)


class UnitExecutor(Protocol):
    def execute(self, path: str, qualified_name: str) -> Any: ...


def module_name_for(qualified_name: str) -> str:
    """Dotted module name for a qualified class name in any convention."""
    return '.'.join(split_qualified_name(qualified_name))


class ModuleExecutor:
    """Execute a source unit as a fresh module.

    The module is published in ``sys.modules`` under the dotted qualified name
    while it runs, so definitions inside it can refer back to their module.
    The produced value is the attribute named after the last segment of the
    qualified name (the defined type), or ``None`` when the unit defines no
    such name.
    """

    def execute(self, path: str, qualified_name: str) -> Any:
        module_name = module_name_for(qualified_name)
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise UnitExecutionError(qualified_name, path, "no module spec for path")
        module = importlib.util.module_from_spec(spec)
        previous = sys.modules.get(module_name)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            if previous is not None:
                sys.modules[module_name] = previous
            else:
                sys.modules.pop(module_name, None)
            raise
        _log.debug("executed unit %s from %s", module_name, path)
        short_name = module_name.rsplit('.', 1)[-1]
        return getattr(module, short_name, None)
