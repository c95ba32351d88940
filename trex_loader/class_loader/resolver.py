from __future__ import annotations

"""Map qualified class names to source file paths.

Two naming conventions are accepted and normalize to the same segments:

* hierarchical: ``Vendor.Package.ClassName`` or ``Vendor\\Package\\ClassName``
* legacy flat: ``Vendor_Package_ClassName``

Every underscore is a segment separator; there is no escaping.
"""

import os
import re
from typing import List

from trex_loader.core import diagnostics
from trex_loader.core.config import get_base_dir, settings
from trex_loader.errors import InvalidQualifiedNameError
from trex_loader.class_loader.registry import VendorRegistry, get_vendor_registry

HIERARCHICAL_SEPARATORS = ('.', '\\')
_LEADING_SEPARATORS = HIERARCHICAL_SEPARATORS + ('_',)
_SEGMENT_SPLIT = re.compile(r'[.\\_]')


def _strip_leading_separator(qualified_name: str) -> str:
    if qualified_name[:1] in _LEADING_SEPARATORS:
        return qualified_name[1:]
    return qualified_name


def split_qualified_name(qualified_name: str) -> List[str]:
    """Normalize either naming convention into an ordered segment list."""
    stripped = _strip_leading_separator(qualified_name)
    segments = _SEGMENT_SPLIT.split(stripped)
    if not any(segments):
        raise InvalidQualifiedNameError(qualified_name)
    return segments


def detect_vendor(qualified_name: str) -> str:
    return _SEGMENT_SPLIT.split(_strip_leading_separator(qualified_name), 1)[0]


def get_class_path(qualified_name: str, registry: VendorRegistry | None = None) -> str:
    segments = split_qualified_name(qualified_name)
    vendor = detect_vendor(qualified_name)
    if registry is None:
        registry = get_vendor_registry()

    # A single segment names a class at the base directory, not a vendor.
    prefix = ''
    if len(segments) > 1:
        prefix = registry.get_source_path(vendor)
        if not prefix:
            diagnostics.warning(
                diagnostics.VENDOR_NOT_RECORDED,
                f"Detected vendor {vendor} was not recorded",
                subject=vendor,
            )

    relative = os.sep.join(segments) + settings.source_suffix
    return f"{get_base_dir()}{prefix}{relative}"
