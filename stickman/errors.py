"""
Scene errors - raised at the import/validation boundary.

Each validation error carries every finding of the failed pass so callers can
report them all at once.
"""
from typing import List, Sequence, Tuple


class SceneError(Exception):
    """Base exception for scene handling."""
    pass


class SceneImportError(SceneError):
    """Raised when scene text cannot be decoded or a remote source fails."""
    pass


class SceneValidationError(SceneError):
    """Raised when a document violates the scene schema.

    violations: list of (field path, message)
    missing_refs: list of (frame index, object id) not found in the catalog
    """

    def __init__(self, violations: Sequence[Tuple[str, str]] = (),
                 missing_refs: Sequence[Tuple[int, str]] = ()):
        self.violations: List[Tuple[str, str]] = list(violations)
        self.missing_refs: List[Tuple[int, str]] = list(missing_refs)
        super().__init__(self._format())

    def messages(self) -> List[str]:
        """One line per finding."""
        lines = [f"{path}: {msg}" for path, msg in self.violations]
        lines += [f"frames.{frame}.objects: unknown object id '{oid}'" for frame, oid in self.missing_refs]
        return lines

    def _format(self) -> str:
        lines = self.messages()
        return f"Scene validation failed ({len(lines)} problem(s)): " + "; ".join(lines)


class ReferentialIntegrityError(SceneValidationError):
    """Raised when frames reference object ids that the catalog does not define."""

    def __init__(self, missing_refs: Sequence[Tuple[int, str]]):
        super().__init__(violations=(), missing_refs=missing_refs)
