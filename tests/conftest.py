import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'agentrules' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_agentrules_caches


@pytest.fixture(autouse=True)
def _reset_caches():
    reset_agentrules_caches()
    yield
    reset_agentrules_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project environment for tests.

    Points project root resolution at ``tmp_path``, drops any AGENTRULES_*
    overrides from the developer environment and creates an empty
    ``.agentrules/config`` directory for project-level overrides.
    """
    for key in list(os.environ):
        if key.startswith("AGENTRULES_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("AGENTRULES_PROJECT_ROOT", str(tmp_path))
    monkeypatch.chdir(tmp_path)

    (tmp_path / ".agentrules" / "config").mkdir(parents=True, exist_ok=True)
    return tmp_path
