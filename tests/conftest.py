import pytest

from shopdesk.db import connect, ensure_schema


@pytest.fixture
def conn(tmp_path):
    c = connect(tmp_path / "shop.db")
    ensure_schema(c)
    yield c
    c.close()
