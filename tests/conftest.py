# Keep every test away from the real data directory; tests that care pass
# an explicit tmp_path as data_dir.

import pytest

from config import settings


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", str(tmp_path / "data"))
    return tmp_path / "data"
