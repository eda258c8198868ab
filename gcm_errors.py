#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

# gcm_errors.py
from __future__ import annotations

from typing import Optional, Sequence


class ConversionToolError(RuntimeError):
    """
    A fatal condition in one of the pipeline stages.

    Every error aborts the run; nothing is retried. `stages` accumulates the
    names of the stages the error travelled through, outermost first.
    """

    code = "GCM-9999"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.stages: list[str] = []

    def wrap(self, stage: str) -> ConversionToolError:
        self.stages.insert(0, stage)
        return self

    def format(self) -> str:
        context = "".join(f"{stage}: " for stage in self.stages)
        return f"error: [{self.code}] {context}{self.message}"

    def __str__(self) -> str:
        return self.format()


class SetupError(ConversionToolError):
    """The synthesized source (or another input file) could not be read or written."""

    code = "GCM-0010"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class LaunchError(ConversionToolError):
    """The external toolchain could not be started."""

    code = "GCM-0020"

    def __init__(self, message: str, command: Sequence[str] = ()):
        super().__init__(message)
        self.command = list(command)


class HarvestTimeoutError(LaunchError):
    code = "GCM-0021"


class UnexpectedExitError(ConversionToolError):
    """The toolchain exited with a status other than the documented "errors reported" one."""

    code = "GCM-0030"

    def __init__(self, message: str, status: int, command: Sequence[str] = (), stderr: str = ""):
        super().__init__(message)
        self.status = status
        self.command = list(command)
        self.stderr = stderr


class DiagnosticShapeError(ConversionToolError):
    """A "cannot convert" diagnostic did not have the expected shape."""

    code = "GCM-0040"

    def __init__(self, message: str, line: str):
        super().__init__(message)
        self.line = line
