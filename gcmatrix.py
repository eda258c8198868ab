#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import os
import sys
import time
from pathlib import Path
from typing import List, Optional

from gcm_catalog import TypeCatalog
from gcm_context import DEFAULT_EXPECTED_STATUS, DEFAULT_SOURCE_PATH, DEFAULT_TIMEOUT_SECONDS, LogLevel, ProbeContext
from gcm_errors import ConversionToolError, SetupError
from gcm_extract import PATTERNS, get_pattern
from gcm_logger import log_error, log_info
from gcm_pipeline import ConversionPipeline
from gcm_probe import DiagnosticTextProbe
from gcm_report import ASCII_GLYPHS, EMOJI_GLYPHS, format_elapsed, render_grid, render_list, render_summary
from gcm_synth import synthesize, write_source

COMMANDS = ("run", "gen", "generate", "scan")

EXIT_FATAL = 1
EXIT_INTERRUPTED = 130


def _env_timeout() -> float:
    raw = os.getenv("GCM_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        raise SystemExit(f"gcmatrix: error: GCM_TIMEOUT must be a number of seconds, got {raw!r}")


def build_probe_context(args: argparse.Namespace) -> ProbeContext:
    """Build a ProbeContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    timeout = getattr(args, 'timeout', None)
    return ProbeContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
        go_command=getattr(args, 'go', None) or os.getenv("GO") or "go",
        source_path=Path(getattr(args, 'source', None) or DEFAULT_SOURCE_PATH),
        expected_status=getattr(args, 'expect_status', DEFAULT_EXPECTED_STATUS),
        allow_clean_exit=getattr(args, 'allow_clean_exit', False),
        timeout=timeout if timeout is not None else _env_timeout(),
        pattern_name=getattr(args, 'pattern', None) or "go-cannot-convert",
    )


def _select_renderer(args: argparse.Namespace):
    return render_grid if getattr(args, 'format', 'list') == "grid" else render_list


def _select_glyphs(args: argparse.Namespace):
    return ASCII_GLYPHS if getattr(args, 'ascii', False) else EMOJI_GLYPHS


def cmd_run(args: argparse.Namespace) -> int:
    """Generate, compile and report the full conversion matrix."""
    start = time.perf_counter()
    context = build_probe_context(args)
    log_info(context, "starting")

    pipeline = ConversionPipeline(catalog=TypeCatalog.default(), context=context)
    try:
        matrix = pipeline.run(sys.stdout, _select_renderer(args), _select_glyphs(args))
    except ConversionToolError as e:
        log_error(context, e.wrap("gcmatrix").format())
        return EXIT_FATAL
    except KeyboardInterrupt:
        log_error(context, "interrupted")
        return EXIT_INTERRUPTED

    if args.summary:
        render_summary(matrix, sys.stdout)
    print(format_elapsed(time.perf_counter() - start))
    log_info(context, "done")
    return 0


def cmd_gen(args: argparse.Namespace) -> int:
    """Write the synthesized Go program without compiling it."""
    context = build_probe_context(args)
    text = synthesize(TypeCatalog.default())
    if args.output:
        try:
            path = write_source(Path(args.output), text)
        except ConversionToolError as e:
            log_error(context, e.wrap("generating").format())
            return EXIT_FATAL
        log_info(context, f"Generated Go source: {path}")
    else:
        sys.stdout.write(text)
    return 0


def _read_diagnostics(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SetupError(f"cannot read diagnostics file {path!r}: {e}", path=path) from e


def cmd_scan(args: argparse.Namespace) -> int:
    """Report from a previously captured `go build` diagnostic stream."""
    start = time.perf_counter()
    context = build_probe_context(args)
    catalog = TypeCatalog.default()
    pipeline = ConversionPipeline(catalog=catalog, context=context)
    try:
        text = _read_diagnostics(args.diagnostics)
        probe = DiagnosticTextProbe(text, get_pattern(context.pattern_name))
        failures = probe.rejected_pairs(Path(args.diagnostics), catalog)
        matrix = pipeline.report(failures, sys.stdout, _select_renderer(args), _select_glyphs(args))
    except ConversionToolError as e:
        log_error(context, e.wrap("scanning").format())
        return EXIT_FATAL

    if args.summary:
        render_summary(matrix, sys.stdout)
    print(format_elapsed(time.perf_counter() - start))
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add the logging flags shared by every command."""
    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")


def _add_report_args(parser: argparse.ArgumentParser) -> None:
    """Add report layout arguments."""
    parser.add_argument(
        "--format", "-f",
        choices=["list", "grid"],
        default="list",
        help="Report layout (default: list)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Print yes/no instead of emoji verdicts",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print convertible / not convertible totals after the report",
    )
    parser.add_argument(
        "--pattern",
        choices=sorted(PATTERNS),
        default=None,
        help="Pinned diagnostic pattern used to scrape compiler output",
    )


def _add_toolchain_args(parser: argparse.ArgumentParser) -> None:
    """Add Go toolchain invocation arguments."""
    parser.add_argument(
        "--go",
        help="Go toolchain binary (default: $GO or go)",
    )
    parser.add_argument(
        "--source", "-o",
        help=f"Where to write the synthesized program (default: {DEFAULT_SOURCE_PATH})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Seconds to wait for the toolchain (default: $GCM_TIMEOUT or {DEFAULT_TIMEOUT_SECONDS:g})",
    )
    parser.add_argument(
        "--expect-status",
        type=int,
        default=DEFAULT_EXPECTED_STATUS,
        help=f"Exit status meaning 'compilation errors reported' (default: {DEFAULT_EXPECTED_STATUS})",
    )
    parser.add_argument(
        "--allow-clean-exit",
        action="store_true",
        help="Treat a successful build as 'every conversion is valid' instead of an error",
    )


def _with_default_command(argv: List[str]) -> List[str]:
    if argv and (argv[0] in COMMANDS or argv[0] in ("-h", "--help")):
        return argv
    return ["run"] + argv


def main(argv: Optional[List[str]] = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    parser = argparse.ArgumentParser(
        prog="gcmatrix",
        description="Go primitive type conversion matrix",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    ###########################
    # run command
    ###########################
    p_run = subparsers.add_parser("run", help="Compile every conversion and print the matrix (default)")
    _add_common_args(p_run)
    _add_toolchain_args(p_run)
    _add_report_args(p_run)
    p_run.set_defaults(func=cmd_run)

    ###########################
    # gen command
    ###########################
    p_gen = subparsers.add_parser("gen", help="Write the synthesized Go program", aliases=["generate"])
    _add_common_args(p_gen)
    p_gen.add_argument("--output", "-o", help="Output Go file (default: stdout)")
    p_gen.set_defaults(func=cmd_gen)

    ###########################
    # scan command
    ###########################
    p_scan = subparsers.add_parser("scan", help="Report from saved `go build` diagnostics")
    _add_common_args(p_scan)
    _add_report_args(p_scan)
    p_scan.add_argument("diagnostics", help="File holding the compiler's stderr, or '-' for stdin")
    p_scan.set_defaults(func=cmd_scan)

    args = parser.parse_args(_with_default_command(list(argv)))

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
