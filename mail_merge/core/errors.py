"""
Error kinds and the structured result returned by merge operations.
"""

from typing import Any, Optional


class MergeError(Exception):
    """Base class for all mail merge failures."""

    kind = "MergeError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def describe(self) -> str:
        return f"{self.kind}: {self.message}"


class MalformedField(MergeError):
    """Field code instruction text lacks the MERGEFIELD delimiter or a field name."""

    kind = "MalformedField"

    def __init__(self, instruction: str):
        super().__init__(f"Field code does not name a merge field: {instruction!r}")
        self.instruction = instruction


class FieldNotFound(MergeError):
    """The value resolver does not know a field name."""

    kind = "FieldNotFound"

    def __init__(self, field_name: str, reason: Optional[str] = None):
        message = f"{field_name} field not found."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.field_name = field_name


class MalformedDocument(MergeError):
    """An input buffer is not a valid word-processing package with a body."""

    kind = "MalformedDocument"

    def __init__(self, reason: str, index: Optional[int] = None):
        if index is not None:
            message = f"Document at index {index} is malformed: {reason}"
        else:
            message = f"Document is malformed: {reason}"
        super().__init__(message)
        self.index = index
        self.reason = reason


class EmptyInputSet(MergeError):
    """Composition was asked to combine zero documents."""

    kind = "EmptyInputSet"

    def __init__(self, message: str = "No documents to combine."):
        super().__init__(message)


class PackagingFailure(MergeError):
    """The package container could not be read, modified or saved."""

    kind = "PackagingFailure"


class MergeResult:
    """
    Outcome of a merge operation.

    Either ``successful`` is True and ``value`` holds the produced artifact
    (usually package bytes), or it is False and ``error`` holds the
    ``MergeError`` that aborted the operation.
    """

    def __init__(self, successful: bool, value: Any = None, error: Optional[MergeError] = None):
        self.successful = successful
        self.value = value
        self.error = error

    @classmethod
    def ok(cls, value: Any = None) -> 'MergeResult':
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: MergeError) -> 'MergeResult':
        return cls(False, error=error)

    @property
    def error_kind(self) -> Optional[str]:
        return self.error.kind if self.error else None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.describe() if self.error else None

    def __bool__(self) -> bool:
        return self.successful

    def __repr__(self) -> str:
        if self.successful:
            return "MergeResult(successful=True)"
        return f"MergeResult(successful=False, error={self.error_message!r})"
