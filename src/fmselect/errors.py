"""Error codes and exception types raised across the selector."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Type


class ErrorCode(str, Enum):
    # Configuration / input errors
    E100 = "E100"
    E101 = "E101"
    E102 = "E102"
    E104 = "E104"
    E105 = "E105"
    E106 = "E106"

    # Table processing errors
    E304 = "E304"

    # Selection errors
    E500 = "E500"
    E501 = "E501"
    E502 = "E502"
    E503 = "E503"
    E504 = "E504"
    E505 = "E505"
    E506 = "E506"
    E507 = "E507"
    E508 = "E508"
    E509 = "E509"
    E510 = "E510"
    E511 = "E511"

    # Solver invariants
    E900 = "E900"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    ErrorCode.E100: "Config file not found",
    ErrorCode.E101: "Invalid config format",
    ErrorCode.E102: "Missing required field",
    ErrorCode.E104: "Cannot read file",
    ErrorCode.E105: "Empty field value",
    ErrorCode.E106: "Invalid field value",
    ErrorCode.E304: "Row processing failed",
    ErrorCode.E500: "Invalid role",
    ErrorCode.E501: "Insufficient players",
    ErrorCode.E502: "Role file format error",
    ErrorCode.E503: "Player filter error",
    ErrorCode.E504: "Assignment failed",
    ErrorCode.E505: "Duplicate player filter",
    ErrorCode.E506: "Duplicate role",
    ErrorCode.E507: "Filter conflict",
    ErrorCode.E508: "Invalid category",
    ErrorCode.E509: "Invalid footedness",
    ErrorCode.E510: "Role count mismatch",
    ErrorCode.E511: "Duplicate player",
    ErrorCode.E900: "Internal solver error",
}


class SelectorError(Exception):
    """Base class for every error surfaced by the selector."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ReadError(SelectorError):
    """A role file, player file or config file could not be read."""


class ParseError(SelectorError):
    """Input is syntactically malformed."""


class RoleValidationError(SelectorError):
    """Input is well formed but semantically invalid."""

    def __init__(self, code: ErrorCode, message: str, issues: Sequence[str] = ()):
        super().__init__(code, message)
        self.issues: Tuple[str, ...] = tuple(issues)


class AssignmentError(SelectorError):
    """No assignment satisfies eligibility and filters."""

    def __init__(self, code: ErrorCode, message: str, roles: Sequence[str] = ()):
        super().__init__(code, message)
        self.roles: Tuple[str, ...] = tuple(roles)


class InternalError(SelectorError):
    """A solver invariant was violated."""


_ERROR_CLASSES: dict[ErrorCode, Type[SelectorError]] = {
    ErrorCode.E100: ReadError,
    ErrorCode.E104: ReadError,
    ErrorCode.E101: ParseError,
    ErrorCode.E304: ParseError,
    ErrorCode.E502: ParseError,
    ErrorCode.E503: ParseError,
    ErrorCode.E509: ParseError,
    ErrorCode.E102: RoleValidationError,
    ErrorCode.E105: RoleValidationError,
    ErrorCode.E106: RoleValidationError,
    ErrorCode.E500: RoleValidationError,
    ErrorCode.E505: RoleValidationError,
    ErrorCode.E506: RoleValidationError,
    ErrorCode.E508: RoleValidationError,
    ErrorCode.E510: RoleValidationError,
    ErrorCode.E511: RoleValidationError,
    ErrorCode.E501: AssignmentError,
    ErrorCode.E504: AssignmentError,
    ErrorCode.E507: AssignmentError,
    ErrorCode.E900: InternalError,
}


class ErrorBuilder:
    """Builds a :class:`SelectorError` with a standard ``[CODE] message: context`` text."""

    def __init__(self, code: ErrorCode):
        self.code = code
        self._context: Optional[str] = None
        self._issues: Tuple[str, ...] = ()
        self._roles: Tuple[str, ...] = ()

    def with_context(self, context: object) -> "ErrorBuilder":
        self._context = str(context)
        return self

    def with_issues(self, issues: Iterable[str]) -> "ErrorBuilder":
        self._issues = tuple(issues)
        return self

    def with_roles(self, roles: Iterable[str]) -> "ErrorBuilder":
        self._roles = tuple(roles)
        return self

    def build(self) -> SelectorError:
        if self._context:
            message = f"[{self.code.value}] {self.code.message}: {self._context}"
        else:
            message = f"[{self.code.value}] {self.code.message}"

        error_cls = _ERROR_CLASSES[self.code]
        if error_cls is RoleValidationError:
            return RoleValidationError(self.code, message, self._issues)
        if error_cls is AssignmentError:
            return AssignmentError(self.code, message, self._roles)
        return error_cls(self.code, message)


def role_file_format_error(line_num: int, message: str) -> SelectorError:
    return ErrorBuilder(ErrorCode.E502).with_context(f"line {line_num}: {message}").build()


def player_filter_error(player_name: str, line_num: int, message: str) -> SelectorError:
    return (
        ErrorBuilder(ErrorCode.E503)
        .with_context(f"'{player_name}' on line {line_num}: {message}")
        .build()
    )


def invalid_category(category_name: str) -> SelectorError:
    return ErrorBuilder(ErrorCode.E508).with_context(f"'{category_name}'").with_issues(
        [f"unknown category '{category_name}'"]
    ).build()


__all__ = [
    "AssignmentError",
    "ErrorBuilder",
    "ErrorCode",
    "InternalError",
    "ParseError",
    "ReadError",
    "RoleValidationError",
    "SelectorError",
    "invalid_category",
    "player_filter_error",
    "role_file_format_error",
]
