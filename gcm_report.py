"""
Conversion matrix reporting.

The matrix is derived, never stored: a pair is convertible iff the compiler
did not reject it.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Iterator, List, TextIO, Tuple

from gcm_catalog import FailureSet, TypeCatalog, type_kind, underlying


@dataclass(frozen=True)
class Glyphs:
    convertible: str
    not_convertible: str


EMOJI_GLYPHS = Glyphs(convertible="✅", not_convertible="❌")
ASCII_GLYPHS = Glyphs(convertible="yes", not_convertible="no")


@dataclass
class ConversionMatrix:
    catalog: TypeCatalog
    failures: FailureSet

    def is_convertible(self, from_type: str, to_type: str) -> bool:
        return not self.failures.contains(from_type, to_type)

    def rows(self) -> Iterator[Tuple[str, List[Tuple[str, bool]]]]:
        """Yield (from_type, [(to_type, convertible), ...]) in catalog order."""
        for from_type in self.catalog:
            yield from_type, [
                (to_type, self.is_convertible(from_type, to_type))
                for to_type in self.catalog
            ]

    def counts(self) -> Tuple[int, int]:
        """Return (convertible, not_convertible) over the whole self-product."""
        ok = sum(1 for pair in self.catalog.pairs() if self.is_convertible(pair.from_type, pair.to_type))
        total = len(self.catalog) * len(self.catalog)
        return ok, total - ok


def section_header(from_type: str) -> str:
    return f"---------- converting {from_type} values ----------"


def format_verdict(from_type: str, to_type: str, convertible: bool, glyphs: Glyphs = EMOJI_GLYPHS) -> str:
    mark = glyphs.convertible if convertible else glyphs.not_convertible
    return f"{from_type:>10} -> {to_type:<10} {mark}"


def render_list(matrix: ConversionMatrix, out: TextIO, glyphs: Glyphs = EMOJI_GLYPHS) -> None:
    for from_type, verdicts in matrix.rows():
        print(section_header(from_type), file=out)
        for to_type, convertible in verdicts:
            print(format_verdict(from_type, to_type, convertible, glyphs), file=out)


def legend_note(name: str) -> str:
    """Kind of a catalog type, plus its target when it is an alias; empty for unknown names."""
    try:
        kind = type_kind(name)
    except KeyError:
        return ""
    target = underlying(name)
    if target != name:
        return f"  [{kind.value}, alias of {target}]"
    return f"  [{kind.value}]"


def render_grid(matrix: ConversionMatrix, out: TextIO, glyphs: Glyphs = EMOJI_GLYPHS) -> None:
    """
    Compact table: one row per source type, one column per target type.

    Column headers are numbered and listed in a legend, since the type names
    are too wide to fit a column each.
    """
    names = list(matrix.catalog)
    name_width = max(len(n) for n in names)
    cell_width = max(len(str(len(names))), len(glyphs.convertible), len(glyphs.not_convertible)) + 1

    print("to:", file=out)
    for idx, name in enumerate(names, start=1):
        print(f"  {idx:>{cell_width - 1}} = {name:<{name_width}}{legend_note(name)}", file=out)
    print(file=out)

    header = " " * (name_width + 3) + "".join(f"{i:>{cell_width}}" for i in range(1, len(names) + 1))
    print(header.rstrip(), file=out)
    for from_type, verdicts in matrix.rows():
        cells = "".join(
            f"{(glyphs.convertible if ok else glyphs.not_convertible):>{cell_width}}"
            for _, ok in verdicts
        )
        print(f"{from_type:>{name_width}} ->{cells}", file=out)


def render_summary(matrix: ConversionMatrix, out: TextIO) -> None:
    ok, bad = matrix.counts()
    print(f"{ok + bad} pair(s): {ok} convertible, {bad} not convertible", file=out)


def format_elapsed(seconds: float) -> str:
    if seconds < 1.0:
        return f"execution took {seconds * 1000:.1f}ms"
    return f"execution took {seconds:.3f}s"
