#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from pathlib import Path
from typing import Protocol

from gcm_catalog import FailureSet, TypeCatalog
from gcm_context import ProbeContext
from gcm_errors import UnexpectedExitError
from gcm_extract import DiagnosticPattern, extract_failures, get_pattern
from gcm_harvest import DiagnosticHarvester, excerpt
from gcm_logger import log_debug


class ConversionProbe(Protocol):
    """Given the synthesized source, return the set of rejected pairs."""

    def rejected_pairs(self, source_path: Path, catalog: TypeCatalog) -> FailureSet:
        ...


class GoCompilerProbe:
    """
    The real probe: harvest `go build` diagnostics and scrape them.
    """

    def __init__(
        self,
        context: ProbeContext | None = None,
        harvester: DiagnosticHarvester | None = None,
        pattern: DiagnosticPattern | None = None,
    ):
        self.context = context or ProbeContext.default()
        self.harvester = harvester or DiagnosticHarvester(self.context)
        self.pattern = pattern or get_pattern(self.context.pattern_name)

    def rejected_pairs(self, source_path: Path, catalog: TypeCatalog) -> FailureSet:
        stderr = self.harvester.harvest(source_path)
        failures = extract_failures(stderr, self.pattern, catalog)
        log_debug(self.context, f"Extracted {len(failures)} conversion failure(s)")
        if len(failures) == 0 and stderr.strip():
            # Failed, but not because of a conversion: toolchain or setup trouble.
            cmd = self.harvester.command_for(source_path)
            raise UnexpectedExitError(
                f"'{' '.join(cmd)}' failed without any '{self.pattern.marker}' diagnostic:\n"
                f"{excerpt(stderr)}",
                status=self.context.expected_status,
                command=cmd,
                stderr=stderr,
            )
        return failures


class DiagnosticTextProbe:
    """
    Probe over an already captured diagnostic stream; never runs a compiler.
    """

    def __init__(self, text: str, pattern: DiagnosticPattern | None = None):
        self.text = text
        self.pattern = pattern or get_pattern("go-cannot-convert")

    def rejected_pairs(self, source_path: Path, catalog: TypeCatalog) -> FailureSet:
        return extract_failures(self.text, self.pattern, catalog)
