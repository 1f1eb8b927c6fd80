"""Exceptions raised by the client and the schema decoder."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

PathElem = Union[str, int]


@dataclass(frozen=True)
class Issue:
    """One violated constraint: where, what was expected, what was found."""

    path: Tuple[PathElem, ...]
    expected: str
    got: Any

    @property
    def location(self) -> str:
        return ".".join(str(p) for p in self.path)

    def __str__(self) -> str:
        where = self.location or "<root>"
        return f"{where}: expected {self.expected}, got {self.got!r}"


class HackerNewsError(Exception):
    pass


class TransportError(HackerNewsError):
    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class ValidationFailure(HackerNewsError):
    """Every issue found in a single pass over a payload."""

    def __init__(self, issues: Iterable[Issue]):
        self.issues = tuple(issues)
        lines = "\n".join(f"  - {issue}" for issue in self.issues)
        super().__init__(f"{len(self.issues)} validation issue(s):\n{lines}")


class TagDispatchFailure(ValidationFailure):
    """No variant of a tagged union declares the payload's tag."""

    def __init__(self, tag_field: str, tag: Any, accepted: Iterable[str]):
        self.tag_field = tag_field
        self.tag = tag
        self.accepted = tuple(accepted)
        super().__init__([Issue((tag_field,), "one of declared tags", tag)])

    def __str__(self) -> str:
        return f"unknown {self.tag_field} {self.tag!r}; expected one of {', '.join(self.accepted)}"
