"""
End-to-end run against a real Go toolchain.

Skipped when no `go` binary is available.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import io
import os
import subprocess

import pytest

from conftest import go_allows
from gcm_context import DEFAULT_EXPECTED_STATUS
from gcm_harvest import build_command
from gcm_pipeline import ConversionPipeline
from gcm_probe import GoCompilerProbe
from gcm_synth import synthesize, write_source


def _check_go_available():
    """Check if the Go toolchain is available."""
    try:
        subprocess.run(
            [os.getenv("GO") or "go", "version"],
            capture_output=True,
            check=True,
            timeout=10,
        )
        return True
    except (OSError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return False


pytestmark = pytest.mark.skipif(not _check_go_available(), reason="Go toolchain not available")


@pytest.fixture
def go_context(probe_context, tmp_path, monkeypatch):
    probe_context.go_command = os.getenv("GO") or "go"
    probe_context.timeout = 600
    monkeypatch.setenv("GOCACHE", str(tmp_path / "gocache"))
    return probe_context



def test_build_exits_with_default_expected_status(go_context, catalog):
    path = write_source(go_context.source_path, synthesize(catalog))

    result = subprocess.run(
        build_command(go_context.go_command, path, go_context.artifact_sink),
        capture_output=True,
        text=True,
        timeout=600,
    )

    assert result.returncode == DEFAULT_EXPECTED_STATUS
    assert "cannot convert" in result.stderr


def test_real_matrix_matches_go_rules(go_context, catalog):
    assert go_context.expected_status == DEFAULT_EXPECTED_STATUS

    matrix = ConversionPipeline(catalog, GoCompilerProbe(go_context), go_context).run(io.StringIO())

    for pair in catalog.pairs():
        assert matrix.is_convertible(pair.from_type, pair.to_type) == go_allows(pair.from_type, pair.to_type), str(pair)
