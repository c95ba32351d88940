"""Path helpers shared by the class loader tests."""

import os
import pathlib

# Fake project tree used as the resolution base directory in tests.
FIXTURE_BASE_DIR = str(pathlib.Path(__file__).resolve().parent / 'fixtures' / 'project') + os.sep


def sep_path(*parts: str, trailing: bool = False) -> str:
    """Join parts with the host separator, optionally with a trailing one."""
    joined = os.sep.join(parts)
    return joined + os.sep if trailing else joined


def base_path(*parts: str, trailing: bool = False) -> str:
    return FIXTURE_BASE_DIR + sep_path(*parts, trailing=trailing)
