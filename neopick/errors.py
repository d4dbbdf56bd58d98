"""Exception types shared by startup and the interactive session."""

from __future__ import annotations


class NeopickError(Exception):
    """Base class for all neopick errors."""


class StartupError(NeopickError):
    """Environment problem that prevents an interactive session from starting."""


class NoTerminalError(StartupError):
    """No controlling terminal could be opened for interactive input."""


class InteractiveInputError(StartupError):
    """Standard input is a terminal instead of a pipe or file."""


class EmptyInputError(StartupError):
    """Standard input delivered zero records."""


class SessionInterrupted(NeopickError):
    """Raised from a signal handler to unwind the session loop."""

    def __init__(self, signum: int) -> None:
        super().__init__(f"interrupted by signal {signum}")
        self.signum = signum


__all__ = [
    "NeopickError",
    "StartupError",
    "NoTerminalError",
    "InteractiveInputError",
    "EmptyInputError",
    "SessionInterrupted",
]
