from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write_sql(tmp_path: Path) -> Callable[..., Path]:
	def _write(text: str, name: str = "query.sql") -> Path:
		path = tmp_path / name
		path.write_text(text, encoding="utf-8")
		return path
	return _write
