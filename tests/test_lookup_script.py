"""
scripts/lookup.py argument handling, run as a subprocess with in-memory storage.
"""

import os
import subprocess
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SCRIPT = os.path.join(ROOT, "scripts", "lookup.py")


def _run(*args):
    env = {**os.environ, "LOOKUP_STORAGE": "memory"}
    return subprocess.run(
        [sys.executable, SCRIPT, *args],
        cwd=ROOT, env=env, capture_output=True, text=True,
    )


@pytest.mark.parametrize("cmd, what", [("search", "keyword"), ("label", "airport code")])
def test_missing_argument_exits_with_error(cmd, what):
    result = _run(cmd)
    assert result.returncode == 1
    assert what in result.stderr


def test_cache_on_empty_store():
    result = _run("cache")
    assert result.returncode == 0
    assert "Lookup cache is empty." in result.stdout
