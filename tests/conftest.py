from collections.abc import Iterator
from pathlib import Path

import pytest

from searchlist.util.log import Log, LogFormat, LogLevel


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    monkeypatch.setenv("SEARCHLIST_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SEARCHLIST_CONFIG_DIR", str(tmp_path / "config"))
    yield tmp_path
    Log.configure(level=LogLevel.INFO, format=LogFormat.KV, console=False, file=False)


@pytest.fixture
def anyio_backend() -> str:
    # Textual runs on asyncio only.
    return "asyncio"
