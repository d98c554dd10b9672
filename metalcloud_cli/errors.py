"""
Errors — Exception hierarchy for the CLI

Every condition a command can fail with maps to a subclass of
MetalCloudCLIError, so the entry point can print a clean message and
choose an exit code without inspecting error text.

Hierarchy:
    MetalCloudCLIError
    ├── InvalidArgument        (malformed/empty identifier or flag value)
    │   └── MissingArgument    (required flag absent)
    ├── UnknownCommand         (no registered command matches)
    ├── AmbiguousCommand       (two commands claim the same subject/predicate)
    ├── NotFound               (label resolution found no match)
    ├── RemoteError            (client adapter call failed)
    └── OperationNotConfirmed  (destructive action declined)
"""

from typing import Optional


class MetalCloudCLIError(Exception):
    """Base class for all errors surfaced to the operator."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint


class InvalidArgument(MetalCloudCLIError):
    """A flag value or identifier token could not be used."""


class MissingArgument(InvalidArgument):
    """A required flag was not supplied."""

    def __init__(self, flag: str, hint: Optional[str] = None):
        super().__init__(f"{flag} is required", hint=hint)
        self.flag = flag


class UnknownCommand(MetalCloudCLIError):
    """No registered command matches the subject/predicate pair."""

    def __init__(self, subject: str, predicate: str):
        super().__init__(
            f"Unknown command '{subject} {predicate}'",
            hint="Run 'metalcloud-cli help' to list available commands"
        )
        self.subject = subject
        self.predicate = predicate


class AmbiguousCommand(MetalCloudCLIError):
    """More than one registered command claims the same subject/predicate pair."""

    def __init__(self, subject: str, predicate: str, claimants: tuple = ()):
        message = f"Command '{subject} {predicate}' is registered more than once"
        if claimants:
            message += f" ({', '.join(claimants)})"
        super().__init__(message)
        self.subject = subject
        self.predicate = predicate
        self.claimants = claimants


class NotFound(MetalCloudCLIError):
    """A label lookup matched no entity."""


class RemoteError(MetalCloudCLIError):
    """
    A client adapter call failed.

    The underlying transport or API error is kept as __cause__ and,
    for API errors, the remote error code in `code`.
    """

    def __init__(self, message: str, method: Optional[str] = None, code: Optional[int] = None):
        super().__init__(message)
        self.method = method
        self.code = code


class OperationNotConfirmed(MetalCloudCLIError):
    """The operator declined a destructive action."""

    def __init__(self, message: str = "Operation not confirmed. Aborting"):
        super().__init__(message)


__all__ = [
    'MetalCloudCLIError',
    'InvalidArgument',
    'MissingArgument',
    'UnknownCommand',
    'AmbiguousCommand',
    'NotFound',
    'RemoteError',
    'OperationNotConfirmed',
]
