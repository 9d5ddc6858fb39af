"""Error types for leb.

Two layers:

- ``AdapterError`` is raised by the adapter runner. It is one exception type
  carrying an ``AdapterErrorKind`` discriminant, so callers switch on
  ``error.kind`` rather than on exception classes.
- ``CliError`` is the user-facing error with a stable ``ErrorCode``, a
  message, optional structured details and an optional remediation hint.
  It renders as ``error: <message>`` for humans or as a JSON document.
"""

from enum import StrEnum
from typing import Any

STDERR_LIMIT = 500


class ErrorCode(StrEnum):
    """Stable, self-descriptive error codes."""

    # Environment
    RUNTIME_NOT_FOUND = "RUNTIME_NOT_FOUND"
    RUNTIME_VERSION_MISMATCH = "RUNTIME_VERSION_MISMATCH"
    DEPS_NOT_INSTALLED = "DEPS_NOT_INSTALLED"

    # Adapter
    ADAPTER_NOT_FOUND = "ADAPTER_NOT_FOUND"
    ADAPTER_SCRIPT_MISSING = "ADAPTER_SCRIPT_MISSING"
    ADAPTER_TIMEOUT = "ADAPTER_TIMEOUT"
    ADAPTER_CRASHED = "ADAPTER_CRASHED"
    ADAPTER_MALFORMED_OUTPUT = "ADAPTER_MALFORMED_OUTPUT"
    ADAPTER_INVALID_OUTPUT = "ADAPTER_INVALID_OUTPUT"

    # Input
    SCENARIO_NOT_FOUND = "SCENARIO_NOT_FOUND"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Internal
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AdapterErrorKind(StrEnum):
    """Ways an adapter invocation can fail."""

    TIMEOUT = "timeout"
    CRASHED = "crashed"
    MALFORMED_OUTPUT = "malformed_output"
    INVALID_OUTPUT = "invalid_output"
    SPAWN_FAILED = "spawn_failed"


def truncate(text: str, limit: int = STDERR_LIMIT) -> str:
    """Bound diagnostic text to ``limit`` characters."""
    if len(text) <= limit:
        return text
    return text[:limit] + "...(truncated)"


class AdapterError(Exception):
    """Raised when an adapter subprocess fails.

    Attributes:
        kind: Failure kind.
        adapter_name: Adapter that failed.
        exit_code: Process exit code (CRASHED, and when known otherwise).
        stderr: Captured stderr, truncated for diagnostics.
        timeout_ms: Configured timeout (TIMEOUT only).
        validation_errors: Formatted schema errors (INVALID_OUTPUT only).
    """

    def __init__(
        self,
        kind: AdapterErrorKind,
        adapter_name: str,
        message: str,
        exit_code: int | None = None,
        stderr: str | None = None,
        timeout_ms: int | None = None,
        validation_errors: list[str] | None = None,
    ) -> None:
        self.kind = kind
        self.adapter_name = adapter_name
        self.exit_code = exit_code
        self.stderr = truncate(stderr) if stderr is not None else None
        self.timeout_ms = timeout_ms
        self.validation_errors = validation_errors or []
        super().__init__(message)

    @property
    def message(self) -> str:
        """Human-readable error message."""
        return str(self)

    @classmethod
    def timeout(cls, adapter_name: str, timeout_ms: int) -> "AdapterError":
        return cls(
            AdapterErrorKind.TIMEOUT,
            adapter_name,
            f"Adapter timed out after {timeout_ms}ms",
            timeout_ms=timeout_ms,
        )

    @classmethod
    def crashed(cls, adapter_name: str, exit_code: int, stderr: str) -> "AdapterError":
        return cls(
            AdapterErrorKind.CRASHED,
            adapter_name,
            f"Adapter exited with code {exit_code}: {truncate(stderr.strip())}",
            exit_code=exit_code,
            stderr=stderr,
        )

    @classmethod
    def malformed_output(
        cls, adapter_name: str, stdout: str, stderr: str
    ) -> "AdapterError":
        return cls(
            AdapterErrorKind.MALFORMED_OUTPUT,
            adapter_name,
            f"Failed to parse adapter output as JSON: {stdout[:200]}",
            exit_code=0,
            stderr=stderr,
        )

    @classmethod
    def invalid_output(
        cls, adapter_name: str, errors: list[str], stderr: str
    ) -> "AdapterError":
        return cls(
            AdapterErrorKind.INVALID_OUTPUT,
            adapter_name,
            "Adapter output validation failed:\n" + "\n".join(errors),
            exit_code=0,
            stderr=stderr,
            validation_errors=errors,
        )

    @classmethod
    def spawn_failed(cls, adapter_name: str, reason: str) -> "AdapterError":
        return cls(
            AdapterErrorKind.SPAWN_FAILED,
            adapter_name,
            f"Failed to start adapter: {reason}",
        )


class CliError(Exception):
    """User-facing error with a stable code and optional structured details."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        self.suggestion = suggestion
        super().__init__(message)

    def to_human(self) -> str:
        """Format for human-readable output (stderr)."""
        return f"error: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Format for JSON output."""
        error: dict[str, Any] = {"code": str(self.code), "message": self.message}
        if self.details:
            error["details"] = self.details
        if self.suggestion:
            error["suggestion"] = self.suggestion
        return {"success": False, "error": error}


class Errors:
    """Factory functions for common errors."""

    @staticmethod
    def runtime_not_found(runtime: str, reason: str) -> CliError:
        return CliError(
            ErrorCode.RUNTIME_NOT_FOUND,
            f"{runtime} not found",
            details={"runtime": runtime, "reason": reason},
            suggestion=f"Install {'PHP 8.3+' if runtime == 'php' else 'Ruby 3.3+'}",
        )

    @staticmethod
    def runtime_version_mismatch(runtime: str, required: str, found: str) -> CliError:
        return CliError(
            ErrorCode.RUNTIME_VERSION_MISMATCH,
            f"{runtime} version mismatch: requires {required}, found {found}",
            details={
                "runtime": runtime,
                "required_version": required,
                "found_version": found,
            },
            suggestion=f"Upgrade {runtime} to version {required} or higher",
        )

    @staticmethod
    def deps_not_installed(runtime: str, command: str) -> CliError:
        return CliError(
            ErrorCode.DEPS_NOT_INSTALLED,
            f"{runtime} dependencies not installed",
            details={"runtime": runtime, "install_command": command},
            suggestion=f"Run '{command}' to install dependencies",
        )

    @staticmethod
    def adapter_not_found(adapter: str, available: list[str]) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_NOT_FOUND,
            f"unknown adapter: {adapter}",
            details={"adapter": adapter, "available": available},
            suggestion=f"Use one of: {', '.join(available)}",
        )

    @staticmethod
    def adapter_script_missing(adapter: str, path: str) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_SCRIPT_MISSING,
            f"adapter script not found: {adapter}",
            details={"adapter": adapter, "expected_path": path},
            suggestion="Check that the adapter file exists",
        )

    @staticmethod
    def adapter_timeout(adapter: str, timeout_ms: int) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_TIMEOUT,
            f"adapter timed out: {adapter}",
            details={"adapter": adapter, "timeout_ms": timeout_ms},
            suggestion="Try reducing iterations or data scale",
        )

    @staticmethod
    def adapter_crashed(adapter: str, exit_code: int, stderr: str) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_CRASHED,
            f"adapter crashed: {adapter} (exit {exit_code})",
            details={
                "adapter": adapter,
                "exit_code": exit_code,
                "stderr": stderr[:STDERR_LIMIT],
            },
            suggestion="Check adapter script for errors",
        )

    @staticmethod
    def adapter_malformed_output(adapter: str, message: str) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_MALFORMED_OUTPUT,
            f"adapter produced non-JSON output: {adapter}",
            details={"adapter": adapter, "reason": message},
            suggestion="Make sure the adapter writes only JSON to stdout",
        )

    @staticmethod
    def adapter_invalid_output(adapter: str, errors: list[str]) -> CliError:
        return CliError(
            ErrorCode.ADAPTER_INVALID_OUTPUT,
            f"adapter output failed schema validation: {adapter}",
            details={"adapter": adapter, "errors": errors},
            suggestion="Run 'leb schema' to see the expected output format",
        )

    @staticmethod
    def scenario_not_found(path: str) -> CliError:
        return CliError(
            ErrorCode.SCENARIO_NOT_FOUND,
            f"scenario not found: {path}",
            details={"scenario_path": path},
            suggestion="Run 'leb list scenarios' to see available scenarios",
        )

    @staticmethod
    def invalid_argument(arg: str, reason: str) -> CliError:
        return CliError(
            ErrorCode.INVALID_ARGUMENT,
            f"invalid argument: {arg} - {reason}",
            details={"argument": arg, "reason": reason},
        )

    @staticmethod
    def config_error(reason: str, path: str | None = None) -> CliError:
        details: dict[str, Any] = {"reason": reason}
        if path:
            details["path"] = path
        return CliError(
            ErrorCode.CONFIG_ERROR,
            f"invalid configuration: {reason}",
            details=details,
            suggestion="Check leb.config.json (or set LEB_CONFIG)",
        )

    @staticmethod
    def internal(reason: str) -> CliError:
        return CliError(ErrorCode.INTERNAL_ERROR, reason)

    @staticmethod
    def from_adapter_error(error: AdapterError) -> CliError:
        """Map an AdapterError to its user-facing CliError."""
        match error.kind:
            case AdapterErrorKind.TIMEOUT:
                return Errors.adapter_timeout(error.adapter_name, error.timeout_ms or 0)
            case AdapterErrorKind.CRASHED:
                return Errors.adapter_crashed(
                    error.adapter_name, error.exit_code or 1, error.stderr or ""
                )
            case AdapterErrorKind.MALFORMED_OUTPUT:
                return Errors.adapter_malformed_output(error.adapter_name, error.message)
            case AdapterErrorKind.INVALID_OUTPUT:
                return Errors.adapter_invalid_output(
                    error.adapter_name, error.validation_errors
                )
            case _:
                return CliError(
                    ErrorCode.ADAPTER_NOT_FOUND,
                    error.message,
                    details={"adapter": error.adapter_name},
                    suggestion="Run 'leb check' to verify the adapter environment",
                )


# Codes that mean the adapter's environment is not usable
ENVIRONMENT_ERROR_CODES = frozenset(
    {
        ErrorCode.RUNTIME_NOT_FOUND,
        ErrorCode.RUNTIME_VERSION_MISMATCH,
        ErrorCode.DEPS_NOT_INSTALLED,
        ErrorCode.ADAPTER_SCRIPT_MISSING,
    }
)
