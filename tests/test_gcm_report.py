#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io

from gcm_catalog import ConversionPair, FailureSet, TypeCatalog
from gcm_report import (
    ASCII_GLYPHS,
    ConversionMatrix,
    format_elapsed,
    format_verdict,
    legend_note,
    render_grid,
    render_list,
    render_summary,
    section_header,
)


def _small_matrix() -> ConversionMatrix:
    catalog = TypeCatalog.of(["bool", "int", "string"])
    failures = FailureSet.of([
        ConversionPair("bool", "int"),
        ConversionPair("bool", "string"),
        ConversionPair("int", "bool"),
        ConversionPair("string", "bool"),
        ConversionPair("string", "int"),
    ])
    return ConversionMatrix(catalog, failures)


def test_format_verdict_alignment():
    assert format_verdict("int8", "string", True) == "      int8 -> string     ✅"
    assert format_verdict("bool", "int", False) == "      bool -> int        ❌"
    assert format_verdict("bool", "int", False, ASCII_GLYPHS).endswith(" no")


def test_section_header():
    assert section_header("rune") == "---------- converting rune values ----------"


def test_render_list_groups_by_source_type():
    out = io.StringIO()

    render_list(_small_matrix(), out, ASCII_GLYPHS)

    lines = out.getvalue().splitlines()
    assert len(lines) == 3 * (1 + 3)
    assert lines[0] == section_header("bool")
    assert lines[1].split() == ["bool", "->", "bool", "yes"]
    assert lines[2].split() == ["bool", "->", "int", "no"]
    assert lines[4] == section_header("int")
    assert lines[7].split() == ["int", "->", "string", "yes"]
    assert lines[8] == section_header("string")
    assert lines[10].split() == ["string", "->", "int", "no"]


def test_matrix_verdicts_are_absence_from_failures():
    matrix = _small_matrix()

    assert matrix.is_convertible("int", "string")
    assert not matrix.is_convertible("string", "int")
    assert matrix.counts() == (4, 5)


def test_rows_follow_catalog_order():
    rows = list(_small_matrix().rows())

    assert [name for name, _ in rows] == ["bool", "int", "string"]
    assert [to for to, _ in rows[1][1]] == ["bool", "int", "string"]


def test_render_grid_has_row_per_type():
    out = io.StringIO()

    render_grid(_small_matrix(), out, ASCII_GLYPHS)

    text = out.getvalue()
    assert "  1 = bool" in text
    assert "  3 = string" in text
    rows = [line for line in text.splitlines() if "->" in line]
    assert len(rows) == 3
    assert rows[2].split() == ["string", "->", "no", "no", "yes"]


def test_render_summary():
    out = io.StringIO()

    render_summary(_small_matrix(), out)

    assert out.getvalue() == "9 pair(s): 4 convertible, 5 not convertible\n"


def test_format_elapsed():
    assert format_elapsed(0.25) == "execution took 250.0ms"
    assert format_elapsed(2.5) == "execution took 2.500s"


def test_legend_note_names_kind_and_alias_target():
    assert legend_note("bool") == "  [boolean]"
    assert legend_note("complex64") == "  [complex]"
    assert legend_note("byte") == "  [integer, alias of uint8]"
    assert legend_note("rune") == "  [integer, alias of int32]"
    assert legend_note("MyInt") == ""


def test_render_grid_legend_marks_aliases():
    out = io.StringIO()

    render_grid(ConversionMatrix(TypeCatalog.default(), FailureSet()), out, ASCII_GLYPHS)

    legend = [line for line in out.getvalue().splitlines() if " = " in line]
    assert len(legend) == 19
    assert legend[0].split() == ["1", "=", "bool", "[boolean]"]
    assert legend[17].split() == ["18", "=", "byte", "[integer,", "alias", "of", "uint8]"]
    assert legend[18].split() == ["19", "=", "rune", "[integer,", "alias", "of", "int32]"]
