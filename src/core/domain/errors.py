"""Project-native typed exceptions for registry reads and report building.

`NotRegistered` is deliberately absent: an empty title is a business outcome
(see `core.domain.models.NotRegistered`), not a failure.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base exception for registry-related failures."""


class RemoteCallFailure(RegistryError, ConnectionError):
    """A registry read could not be completed (network, RPC or contract error).

    Attributes:
        method: Optional name of the remote method that failed.
    """

    def __init__(self, message: str, method: str | None = None):
        super().__init__(message)
        self.method = method


class DecodeFailure(RegistryError, ValueError):
    """A raw wire value could not be converted to text.

    Attributes:
        raw: The offending raw value.
    """

    def __init__(self, message: str, raw: object = None):
        super().__init__(message)
        self.raw = raw


class BuildReportFailure(RegistryError, RuntimeError):
    """Building a provider report was aborted.

    Attributes:
        field: Logical field being resolved (`title`, `param_value`, `curve`...).
        subject: Parameter or endpoint name the field belongs to, if any.
        reason: Human readable description of the underlying failure.
    """

    def __init__(self, field: str, reason: str, subject: str | None = None):
        self.field = field
        self.subject = subject
        self.reason = reason
        super().__init__(f"failed to resolve {self.stage}: {reason}")

    @property
    def stage(self) -> str:
        """`field` or `field:subject`, for diagnostics."""

        if self.subject is None:
            return self.field
        return f"{self.field}:{self.subject}"
