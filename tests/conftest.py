import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "raffle_test.db")


@pytest.fixture()
def db(db_path):
    from raffle_board_api.app.core.db import Database, init_db

    database = Database(db_path, pool_size=2)
    init_db(database)
    yield database
    database.close()


@pytest.fixture()
def make_client(tmp_path):
    """Build a TestClient for an app pointed at ``database_url``.

    The client is entered so startup/shutdown hooks run.
    """
    from fastapi.testclient import TestClient
    from raffle_board_api.app.core.config import Settings
    from raffle_board_api.app.main import create_app

    clients = []

    def _make(database_url: str, static_dir: str | None = None) -> TestClient:
        cfg = Settings(
            database_url=database_url,
            static_dir=static_dir or str(tmp_path / "no-public"),
            cors_origins="*",
        )
        client = TestClient(create_app(cfg))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture()
def client(make_client, db_path):
    return make_client(db_path)
