"""Platform layer: process execution."""

from .process import CommandResult, Runner, SubprocessRunner, run

__all__ = ["CommandResult", "Runner", "SubprocessRunner", "run"]
