"""
Logging utilities for the conversion matrix tool.

All log output goes to stderr so that stdout carries only the report.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import sys
import time
from typing import Optional

from gcm_context import LogLevel, ProbeContext


def log(context: ProbeContext, log_level: LogLevel, message: str) -> None:
    """
    Log a message if the context's logging level admits it.

    Args:
        context:    The run context containing the logging level.
        log_level:  The level of the message to log.
        message:    The message to log.
    """
    prefix = ""
    if context.log_rich_format:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        prefix = {
            LogLevel.ERROR: f"{timestamp} [ERROR] ",
            LogLevel.WARNING: f"{timestamp} [WARNING] ",
            LogLevel.INFO: f"{timestamp} [INFO] ",
            LogLevel.DEBUG: f"{timestamp} [DEBUG] ",
        }.get(log_level, "")
    if context.log_level >= log_level:
        print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: ProbeContext, message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: ProbeContext, message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: ProbeContext, message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: ProbeContext, message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: ProbeContext, stage: str, target: Optional[str] = None) -> None:
    """
    Log the start of a pipeline stage.

    Args:
        context: The run context containing logging flags.
        stage: The name of the stage (e.g., "Generating", "Compiling").
        target: Optional file or command the stage works on.
    """
    if target:
        log(context, LogLevel.INFO, f"{stage} '{target}'")
    else:
        log(context, LogLevel.INFO, f"{stage}...")
