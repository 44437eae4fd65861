"""Error types and recovery strategies for thermodaq.

Error taxonomy:
- CMD: Operator command errors (unrecognized input)
- ACQ: Acquisition errors (sensor read failures, lifecycle misuse)
- CFG: Configuration errors (out-of-range settings)

An empty buffer is not an error: statistics fall back to a sentinel value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """Error category for classification and routing."""

    CMD = "CMD"
    ACQ = "ACQ"
    CFG = "CFG"


class RecoveryAction(Enum):
    """Suggested recovery action for the operator."""

    RETRY = "retry"
    IGNORE = "ignore"
    RESTART = "restart"
    FIX_CONFIG = "fix_config"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Additional context for an error.

    Attributes:
        command: Operator input involved.
        setting: Configuration key involved.
        path: File path involved.
        original_error: The underlying exception message.
    """

    command: Optional[str] = None
    setting: Optional[str] = None
    path: Optional[str] = None
    original_error: Optional[str] = None


class ThermodaqError(Exception):
    """Base exception for all thermodaq errors.

    Attributes:
        category: Error category for classification.
        code: Short error code (e.g., "ACQ-001").
        message: User-friendly error message.
        recovery: Suggested recovery action.
        context: Additional error context.
    """

    def __init__(
        self,
        category: ErrorCategory,
        code: str,
        message: str,
        recovery: RecoveryAction,
        context: Optional[ErrorContext] = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.code = code
        self.message = message
        self.recovery = recovery
        self.context = context or ErrorContext()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def user_message(self) -> str:
        """Return a message suitable for display on the operator console."""
        return self.message


class CommandError(ThermodaqError):
    """Operator command errors."""

    def __init__(
        self,
        code: str,
        message: str,
        recovery: RecoveryAction = RecoveryAction.RETRY,
        context: Optional[ErrorContext] = None,
    ) -> None:
        super().__init__(ErrorCategory.CMD, code, message, recovery, context)


class UnknownCommandError(CommandError):
    """Operator input does not match any recognized command."""

    def __init__(self, command: str) -> None:
        super().__init__(
            code="CMD-001",
            message="Unknown command.",
            recovery=RecoveryAction.RETRY,
            context=ErrorContext(command=command),
        )


class AcquisitionError(ThermodaqError):
    """Acquisition errors (sensor reads, controller lifecycle)."""

    def __init__(
        self,
        code: str,
        message: str,
        recovery: RecoveryAction = RecoveryAction.IGNORE,
        context: Optional[ErrorContext] = None,
    ) -> None:
        super().__init__(ErrorCategory.ACQ, code, message, recovery, context)


class SensorReadError(AcquisitionError):
    """The sensor source failed to produce a usable reading."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code="ACQ-001",
            message=f"Sensor read failed: {reason}. Reading skipped, sampling continues.",
            recovery=RecoveryAction.IGNORE,
            context=ErrorContext(original_error=reason),
        )


class ControllerStoppedError(AcquisitionError):
    """An operation requires a live controller but it has been shut down."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            code="ACQ-002",
            message=f"Cannot {operation}: acquisition has been shut down.",
            recovery=RecoveryAction.RESTART,
        )


class SourceExhaustedError(AcquisitionError):
    """A replay source has no readings left."""

    def __init__(self, count: int) -> None:
        super().__init__(
            code="ACQ-003",
            message=f"Replay source exhausted after {count} readings.",
            recovery=RecoveryAction.IGNORE,
        )


class ConfigError(ThermodaqError):
    """Configuration errors."""

    def __init__(
        self,
        code: str,
        message: str,
        recovery: RecoveryAction = RecoveryAction.FIX_CONFIG,
        context: Optional[ErrorContext] = None,
    ) -> None:
        super().__init__(ErrorCategory.CFG, code, message, recovery, context)


class InvalidSettingError(ConfigError):
    """A configuration value is outside its allowed range."""

    def __init__(self, setting: str, value: object, reason: str, path: Optional[str] = None) -> None:
        super().__init__(
            code="CFG-001",
            message=f"Invalid value {value!r} for '{setting}': {reason}.",
            recovery=RecoveryAction.FIX_CONFIG,
            context=ErrorContext(setting=setting, path=path),
        )
