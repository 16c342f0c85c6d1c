"""Result type used by every fallible step of the release pipeline.

Steps never raise for expected failures (dirty tree, missing tag, failed
push). They return ``Err(payload)`` and the caller decides how to surface it.
Only the CLI layer turns an ``Err`` into a process exit.

Usage:
    match resolve_version(repo, base="1.4.0"):
        case Ok(version):
            print(version)
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful outcome carrying a value."""

    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed outcome carrying an error payload."""

    error: E

    def unwrap(self) -> None:
        """Raises ValueError: an Err has no value."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or[T](self, default: T) -> T:
        return default


type Result[T, E] = Ok[T] | Err[E]
