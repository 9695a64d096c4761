"""
Application-level exceptions.

Only two failure kinds exist: the SNS lookup could not produce an owner, or
something else broke while the bundle was being built.
"""

from __future__ import annotations


class ImbibeError(Exception):
    """Base class for errors raised by Imbibe Action."""


class ResolutionFailure(ImbibeError):
    """SNS domain could not be resolved to an owning account."""

    def __init__(self, domain: str, cause: BaseException | str) -> None:
        self.domain = domain
        self.cause = cause
        super().__init__(f"Could not resolve SNS domain: {domain} ({cause})")


class AssemblyFailure(ImbibeError):
    """Unexpected failure while building instructions or metadata."""
