"""Tagged outcomes returned by every image operation.

Operations never raise for missing files, unsupported formats or codec
failures. They log the problem and return an :class:`OperationResult`; callers
that want an exception call :meth:`OperationResult.raise_for_outcome`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple


class Outcome(str, Enum):
    SUCCESS = "success"
    MISSING_SOURCE = "missing_source"
    UNSUPPORTED_FORMAT = "unsupported_format"
    MISSING_DESTINATION = "missing_destination"
    IO_FAILURE = "io_failure"


class ImageOperationError(Exception):
    """Raised by :meth:`OperationResult.raise_for_outcome` on failure."""

    def __init__(self, result: "OperationResult") -> None:
        super().__init__(result.message or result.outcome.value)
        self.result = result


@dataclass(frozen=True)
class OperationResult:
    """What a thumbnail or crop call produced.

    Attributes
    ----------
    outcome
        Success or the failure category.
    destination
        File written to, when the destination was a path.
    size
        Pixel size of the encoded output.
    format
        Pillow format identifier used for encoding.
    error
        Underlying exception for ``IO_FAILURE``.
    message
        Human-readable summary, mirrors the log record.
    """

    outcome: Outcome
    destination: Optional[Path] = None
    size: Optional[Tuple[int, int]] = None
    format: Optional[str] = None
    error: Optional[BaseException] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def raise_for_outcome(self) -> "OperationResult":
        """Return ``self`` on success, raise :class:`ImageOperationError` otherwise."""

        if not self.ok:
            raise ImageOperationError(self) from self.error
        return self

    @classmethod
    def success(
        cls,
        size: Tuple[int, int],
        format: str,
        destination: Optional[Path] = None,
    ) -> "OperationResult":
        return cls(Outcome.SUCCESS, destination=destination, size=size, format=format)

    @classmethod
    def failure(
        cls,
        outcome: Outcome,
        message: str,
        error: Optional[BaseException] = None,
    ) -> "OperationResult":
        return cls(outcome, error=error, message=message)
