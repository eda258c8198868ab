"""
Go source synthesizer.

Emits one Go program with a conversion statement for every ordered pair of the
catalog. The program is well formed except for the conversions the compiler
rejects, so the only diagnostics it can produce are "cannot convert" errors.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from gcm_catalog import TypeCatalog
from gcm_errors import SetupError

GENERATOR_NAME = "gcmatrix"

# Name of the zero-valued struct variable; diagnostics refer to `p.<type>`.
VALUE_VAR = "p"
STRUCT_NAME = "primitives"


@dataclass
class GoSourceBuilder:
    """
    Helper for building Go code with indentation tracking.
    """
    lines: List[str] = field(default_factory=list)
    indent_level: int = 0
    indent_str: str = "\t"

    def indent(self) -> None:
        self.indent_level += 1

    def dedent(self) -> None:
        assert self.indent_level > 0, "dedent below zero"
        self.indent_level -= 1

    def emit(self, line: str = "") -> None:
        """Emit a line with current indentation."""
        if line:
            self.lines.append(self.indent_str * self.indent_level + line)
        else:
            self.lines.append("")

    def to_string(self) -> str:
        return "\n".join(self.lines) + "\n"


def conversion_statement(from_type: str, to_type: str) -> str:
    return f"_ = {to_type}({VALUE_VAR}.{from_type})"


def synthesize(catalog: TypeCatalog) -> str:
    """
    Return the Go program for `catalog`.

    The output depends only on the catalog, so repeated runs are byte-identical
    and compiler line numbers stay reproducible.
    """
    out = GoSourceBuilder()
    out.emit(f"// Code generated by {GENERATOR_NAME}. DO NOT EDIT.")
    out.emit()
    out.emit("package main")
    out.emit()

    # Struct fields never trigger "declared and not used".
    out.emit(f"type {STRUCT_NAME} struct {{")
    out.indent()
    width = max(len(name) for name in catalog)
    for name in catalog:
        out.emit(f"{name:<{width}} {name}")
    out.dedent()
    out.emit("}")
    out.emit()

    out.emit("func main() {")
    out.indent()
    out.emit(f"var {VALUE_VAR} {STRUCT_NAME}")
    for from_type in catalog:
        out.emit()
        out.emit(f"// {from_type}")
        for to_type in catalog:
            out.emit(conversion_statement(from_type, to_type))
    out.dedent()
    out.emit("}")
    return out.to_string()


def write_source(path: Path, text: str) -> Path:
    """Write the synthesized program to `path`, replacing any previous content."""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise SetupError(f"cannot write synthesized source {str(path)!r}: {e}", path=str(path)) from e
    return path
