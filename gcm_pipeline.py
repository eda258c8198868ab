#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from pathlib import Path
from typing import Callable, TextIO

from gcm_catalog import FailureSet, TypeCatalog, TypeKind, type_kind
from gcm_context import ProbeContext
from gcm_errors import ConversionToolError
from gcm_logger import log_debug, log_stage, log_warning
from gcm_probe import ConversionProbe, GoCompilerProbe
from gcm_report import ConversionMatrix, EMOJI_GLYPHS, Glyphs, render_list
from gcm_synth import synthesize, write_source

Renderer = Callable[[ConversionMatrix, TextIO, Glyphs], None]


def looks_drifted(catalog: TypeCatalog, failures: FailureSet) -> bool:
    """
    True when nothing was rejected although the catalog mixes bool with another
    kind of type; Go never converts bool, so some failure must have been seen.
    """
    if len(failures) > 0:
        return False
    kinds = set()
    for name in catalog:
        try:
            kinds.add(type_kind(name))
        except KeyError:
            return False
    return TypeKind.BOOLEAN in kinds and len(kinds) > 1


class ConversionPipeline:
    """
    generate -> compile -> report.

    Stages run strictly in order; any ConversionToolError aborts the run and is
    re-raised with the failing stage's name attached.
    """

    def __init__(
        self,
        catalog: TypeCatalog | None = None,
        probe: ConversionProbe | None = None,
        context: ProbeContext | None = None,
    ):
        self.context = context or ProbeContext.default()
        self.catalog = catalog or TypeCatalog.default()
        self.probe = probe or GoCompilerProbe(self.context)

    def generate(self) -> Path:
        log_stage(self.context, "Generating", str(self.context.source_path))
        text = synthesize(self.catalog)
        path = write_source(self.context.source_path, text)
        log_debug(self.context, f"Wrote {len(text.splitlines())} line(s) for {len(self.catalog)} type(s)")
        return path

    def compile(self, source_path: Path) -> FailureSet:
        log_stage(self.context, "Compiling", str(source_path))
        failures = self.probe.rejected_pairs(source_path, self.catalog)
        if looks_drifted(self.catalog, failures):
            log_warning(self.context, "no conversion was rejected; the compiler's diagnostics may have changed shape")
        return failures

    def report(self, failures: FailureSet, out: TextIO,
               renderer: Renderer = render_list, glyphs: Glyphs = EMOJI_GLYPHS) -> ConversionMatrix:
        log_stage(self.context, "Reporting results")
        matrix = ConversionMatrix(self.catalog, failures)
        renderer(matrix, out, glyphs)
        return matrix

    def run(self, out: TextIO, renderer: Renderer = render_list, glyphs: Glyphs = EMOJI_GLYPHS) -> ConversionMatrix:
        try:
            source_path = self.generate()
        except ConversionToolError as e:
            raise e.wrap("generating")

        try:
            failures = self.compile(source_path)
        except ConversionToolError as e:
            raise e.wrap("compiling")

        try:
            return self.report(failures, out, renderer, glyphs)
        except ConversionToolError as e:
            raise e.wrap("reporting results")
        except OSError as e:
            raise ConversionToolError(f"cannot write report: {e}").wrap("reporting results") from e
