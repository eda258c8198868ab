#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from gcm_errors import (
    ConversionToolError,
    DiagnosticShapeError,
    HarvestTimeoutError,
    LaunchError,
    SetupError,
    UnexpectedExitError,
)


def test_format_without_stages():
    err = ConversionToolError("boom")

    assert err.format() == "error: [GCM-9999] boom"


def test_format_with_nested_stages():
    err = UnexpectedExitError("exit status 1", status=1, command=["go", "build"])

    err.wrap("compiling").wrap("gcmatrix")

    assert err.format() == "error: [GCM-0030] gcmatrix: compiling: exit status 1"
    assert str(err) == err.format()


def test_codes_are_distinct():
    codes = [cls.code for cls in (
        ConversionToolError, SetupError, LaunchError, HarvestTimeoutError,
        UnexpectedExitError, DiagnosticShapeError,
    )]

    assert len(set(codes)) == len(codes)


def test_error_payloads():
    assert SetupError("x", path="out/a.go").path == "out/a.go"
    assert LaunchError("x", command=("go", "build")).command == ["go", "build"]
    assert DiagnosticShapeError("x", line="cannot convert ?").line == "cannot convert ?"
    assert issubclass(HarvestTimeoutError, LaunchError)
