#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gcm_catalog import ConversionPair, TypeCatalog, TypeKind, type_kind
from gcm_context import LogLevel, ProbeContext


def go_allows(from_type: str, to_type: str) -> bool:
    """Go's conversion rules restricted to the primitive catalog."""
    if from_type == to_type:
        return True
    src, dst = type_kind(from_type), type_kind(to_type)
    if TypeKind.BOOLEAN in (src, dst):
        return src == dst
    if src == TypeKind.STRING:
        return dst == TypeKind.STRING
    if dst == TypeKind.STRING:
        return src == TypeKind.INTEGER
    if TypeKind.COMPLEX in (src, dst):
        return src == dst
    return True


def cannot_convert_line(pair: ConversionPair, line_no: int = 1, filename: str = "output/conversions.go") -> str:
    return (
        f"{filename}:{line_no}:6: cannot convert p.{pair.from_type} "
        f"(variable of type {pair.from_type}) to type {pair.to_type}"
    )


def fake_go_stderr(pairs: Iterable[ConversionPair]) -> str:
    """Diagnostic stream shaped like `go build -gcflags=-e` output for `pairs`."""
    lines = ["# command-line-arguments"]
    for idx, pair in enumerate(pairs, start=30):
        lines.append(cannot_convert_line(pair, idx))
    return "\n".join(lines) + "\n"


def go_rejected_pairs(catalog: TypeCatalog) -> list[ConversionPair]:
    return [p for p in catalog.pairs() if not go_allows(p.from_type, p.to_type)]


class RunResult:
    def __init__(self, returncode=0, stdout="", stderr=""):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@pytest.fixture
def catalog() -> TypeCatalog:
    return TypeCatalog.default()


@pytest.fixture
def probe_context(tmp_path: Path) -> ProbeContext:
    return ProbeContext(
        log_level=LogLevel.SILENT,
        source_path=tmp_path / "output" / "conversions.go",
        timeout=30,
    )


@pytest.fixture
def go_stderr(catalog: TypeCatalog) -> str:
    return fake_go_stderr(go_rejected_pairs(catalog))
