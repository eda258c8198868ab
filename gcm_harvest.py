#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import subprocess
from pathlib import Path
from typing import List

from gcm_context import ProbeContext
from gcm_errors import HarvestTimeoutError, LaunchError, UnexpectedExitError
from gcm_logger import log_debug, log_info, log_warning

# Lines of stderr quoted in an UnexpectedExitError message.
STDERR_EXCERPT_LINES = 10


def build_command(go_command: str, source_path: Path, sink: str) -> List[str]:
    """
    `go build` invocation for the synthesized program.

    `-gcflags=-e` lifts the compiler's cap on reported errors so every rejected
    conversion shows up; `-o sink` discards the (never expected) binary.
    """
    return [go_command, "build", "-gcflags=-e", "-o", sink, str(source_path)]


def excerpt(stderr: str) -> str:
    lines = stderr.strip().splitlines()
    if not lines:
        return "<no output>"
    shown = lines[:STDERR_EXCERPT_LINES]
    if len(lines) > len(shown):
        shown.append(f"... ({len(lines) - len(shown)} more line(s))")
    return "\n".join(shown)


class DiagnosticHarvester:
    """
    Runs the Go toolchain once and returns its diagnostic stream.

    Compilation is expected to fail: the configured `expected_status` is the
    success path of this component.
    """

    def __init__(self, context: ProbeContext | None = None):
        self.context = context or ProbeContext.default()

    def command_for(self, source_path: Path) -> List[str]:
        return build_command(self.context.go_command, source_path, self.context.artifact_sink)

    def harvest(self, source_path: Path) -> str:
        cmd = self.command_for(source_path)
        cmd_str = " ".join(cmd)
        log_info(self.context, f"Compiling: {cmd_str}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.context.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise HarvestTimeoutError(
                f"'{cmd_str}' did not finish within {self.context.timeout:g}s", command=cmd
            ) from e
        except OSError as e:
            raise LaunchError(f"cannot run '{cmd_str}': {e}", command=cmd) from e

        stderr = result.stderr or ""
        log_debug(self.context, f"Toolchain exited with status {result.returncode}, "
                                f"{len(stderr.splitlines())} line(s) of diagnostics")

        if result.returncode == self.context.expected_status:
            return stderr

        if result.returncode == 0:
            if self.context.allow_clean_exit:
                log_warning(self.context, f"'{cmd_str}' compiled cleanly; treating every conversion as valid")
                return stderr
            raise UnexpectedExitError(
                f"'{cmd_str}' compiled cleanly but conversion errors were expected",
                status=0,
                command=cmd,
                stderr=stderr,
            )

        raise UnexpectedExitError(
            f"unexpected exit status {result.returncode} from '{cmd_str}' "
            f"(expected {self.context.expected_status}):\n{excerpt(stderr)}",
            status=result.returncode,
            command=cmd,
            stderr=stderr,
        )
