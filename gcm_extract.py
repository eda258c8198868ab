#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import re
from dataclasses import dataclass
from typing import Dict, Optional

from gcm_catalog import ConversionPair, FailureSet, TypeCatalog
from gcm_errors import DiagnosticShapeError
from gcm_synth import VALUE_VAR


@dataclass(frozen=True)
class DiagnosticPattern:
    """
    Pinned description of one compiler's "cannot convert" message.

    `marker` selects candidate lines; `regex` must then match them with the
    source type in group 1 and the target type in group 2.
    """
    name: str
    version: str
    marker: str
    regex: re.Pattern


# Matches both message shapes the gc toolchain has used:
#   ./conversions.go:31:13: cannot convert p.bool (type bool) to type uint8
#   ./conversions.go:31:13: cannot convert p.bool (variable of type bool) to type uint8
GO_CANNOT_CONVERT = DiagnosticPattern(
    name="go-cannot-convert",
    version="1",
    marker="cannot convert",
    regex=re.compile(rf".+ {VALUE_VAR}\.(\S+) \(.+\) to type (\S+)"),
)

PATTERNS: Dict[str, DiagnosticPattern] = {
    GO_CANNOT_CONVERT.name: GO_CANNOT_CONVERT,
}


def get_pattern(name: str) -> DiagnosticPattern:
    try:
        return PATTERNS[name]
    except KeyError:
        known = ", ".join(sorted(PATTERNS))
        raise ValueError(f"unknown diagnostic pattern '{name}' (known: {known})") from None


def parse_conversion_line(
        line: str,
        pattern: DiagnosticPattern = GO_CANNOT_CONVERT,
) -> Optional[ConversionPair]:
    """
    Extract the rejected (from, to) pair from one diagnostic line.

    Returns None for lines that are not conversion diagnostics. A line carrying
    the marker but not matching the pattern raises DiagnosticShapeError: the
    compiler's wording has drifted and the results cannot be trusted.
    """
    if pattern.marker not in line:
        return None
    m = pattern.regex.match(line)
    if m is None:
        raise DiagnosticShapeError(
            f"unrecognized '{pattern.marker}' diagnostic "
            f"(pattern {pattern.name} v{pattern.version}): {line.strip()!r}",
            line=line,
        )
    return ConversionPair(m.group(1), m.group(2))


def extract_failures(
        text: str,
        pattern: DiagnosticPattern = GO_CANNOT_CONVERT,
        catalog: Optional[TypeCatalog] = None,
) -> FailureSet:
    """
    Build the FailureSet from a whole diagnostic stream.

    When `catalog` is given, pairs naming a type outside it are rejected too.
    """
    failures = FailureSet()
    for line in text.splitlines():
        pair = parse_conversion_line(line, pattern)
        if pair is None:
            continue
        if catalog is not None:
            for name in (pair.from_type, pair.to_type):
                if name not in catalog:
                    raise DiagnosticShapeError(
                        f"diagnostic names type '{name}' which is not in the catalog: {line.strip()!r}",
                        line=line,
                    )
        failures.add(pair)
    return failures
