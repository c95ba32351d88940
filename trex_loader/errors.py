from __future__ import annotations


class ClassLoaderError(Exception):
    """Base class for class loader failures."""


class InvalidQualifiedNameError(ClassLoaderError, ValueError):
    def __init__(self, qualified_name: str) -> None:
        self.qualified_name = qualified_name
        super().__init__(f"Qualified name {qualified_name!r} has no segments to resolve")


class SourceUnitNotFoundError(ClassLoaderError, LookupError):
    """The resolved path for a class does not exist on disk."""

    def __init__(self, qualified_name: str, path: str) -> None:
        self.qualified_name = qualified_name
        self.path = path
        super().__init__(f"No source unit found for class {qualified_name} with the path {path}")


class UnitExecutionError(ClassLoaderError, ImportError):
    """A source unit exists but no module could be built for it."""

    def __init__(self, qualified_name: str, path: str, reason: str) -> None:
        super().__init__(f"Failed to load source unit for class {qualified_name} from {path}: {reason}")
        # ImportError.__init__ resets `path`, so assign afterwards.
        self.qualified_name = qualified_name
        self.path = path
