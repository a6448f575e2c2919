import os
from pathlib import Path

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

SAMPLE_CATALOG = (
    "3\n"
    "Sirius\t6\t45\t8.9\t-16\t42\t58.0\t9\t1\n"
    "Vega  18 36\t56.3   38 47 1.3\t25\t2\n"
    "Altair\t19\t50\t47.0\t8\t52\t6.0\t17\t3\n"
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("STARTOPOLOGY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def write_catalog(tmp_path):
    def _write(text: str, name: str = "stars.txt") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_path(write_catalog) -> Path:
    return write_catalog(SAMPLE_CATALOG)
