import logging
import os
import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"

# Ensure src/ is importable when running tests without installing the package.
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def _isolate_hunkwise_home(monkeypatch: pytest.MonkeyPatch, tmp_path: pathlib.Path):
    """Point HUNKWISE_HOME at a per-test sandbox and clear HUNKWISE_* overrides."""

    for key in list(os.environ):
        if key.startswith("HUNKWISE_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path / "hunkwise-home"
    home.mkdir()
    monkeypatch.setenv("HUNKWISE_HOME", str(home))
    yield home


@pytest.fixture(autouse=True)
def _reset_hunkwise_logger():
    """Undo handler/propagation changes made by logging setup under test."""

    logger = logging.getLogger("hunkwise")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def six_lines() -> str:
    return "one\ntwo\nthree\nfour\nfive\nsix"


@pytest.fixture
def write_file(tmp_path: pathlib.Path):
    """Factory writing UTF-8 text into the test sandbox."""

    def _write(name: str, text: str) -> pathlib.Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
