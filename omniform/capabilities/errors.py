"""Errors raised by capability registration and resolution."""

from typing import Optional


class UndefinedCapabilityError(LookupError):
    """No registered behavior applies to the subject being rendered."""

    def __init__(self, capability: str, target_kind: str, subject: Optional[str] = None):
        self.capability = capability
        self.target_kind = target_kind
        self.subject = subject
        if subject:
            message = f"{capability} has not been defined for {target_kind} '{subject}'"
        else:
            message = f"{capability} has not been defined for {target_kind} behaviors"
        super().__init__(message)


class RegistrySealedError(RuntimeError):
    """A behavior was registered after the registry was sealed."""
