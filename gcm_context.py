"""
Run context for the conversion matrix tool.

This module defines the ProbeContext dataclass which holds the options shared
by every pipeline stage (logging, toolchain invocation, output locations).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

DEFAULT_SOURCE_PATH = Path("output") / "conversions.go"

# `go build` exits 1 when the compiler reported errors. The same status also
# covers setup failures (missing file, bad module), so stderr is checked too.
DEFAULT_EXPECTED_STATUS = 1

DEFAULT_TIMEOUT_SECONDS = 300.0


class LogLevel(IntEnum):
    """Hierarchical logging levels."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only (default)
    WARNING = 6     # Warning messages
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Detailed diagnostic information (-vvv)


@dataclass
class ProbeContext:
    """
    Holds the options that affect more than one pipeline stage.

    Attributes:
        log_rich_format:    If True, emit logs in rich format (timestamps, levels).
        log_level:          Current logging level.
        go_command:         Go toolchain binary, looked up on PATH.
        source_path:        Where the synthesized Go program is written.
        artifact_sink:      Output path handed to `go build -o`; the binary is discarded.
        expected_status:    Exit status meaning "compilation failed with reported errors".
        allow_clean_exit:   If True, a successful build means "no failures" instead of a fatal error.
        timeout:            Seconds to wait for the toolchain before giving up.
        pattern_name:       Name of the pinned diagnostic pattern used for extraction.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.ERROR
    go_command: str = "go"
    source_path: Path = field(default_factory=lambda: DEFAULT_SOURCE_PATH)
    artifact_sink: str = os.devnull
    expected_status: int = DEFAULT_EXPECTED_STATUS
    allow_clean_exit: bool = False
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    pattern_name: str = "go-cannot-convert"

    @staticmethod
    def default() -> 'ProbeContext':
        """Create a ProbeContext with default settings."""
        return ProbeContext(log_level=LogLevel.WARNING)
