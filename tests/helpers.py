from pathlib import Path

from fastapi.testclient import TestClient

from hany_realty.core.config import Settings
from hany_realty.main import create_app

ADMIN_PASSWORD = "admin-pw"


def make_settings(data_dir, **overrides) -> Settings:
    values = {
        "data_dir": Path(data_dir),
        "static_dir": Path(data_dir) / "public",
        "database_url": None,
        "admin_password": ADMIN_PASSWORD,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def start_client(testcase, settings: Settings) -> TestClient:
    """Builds the app and runs its startup hooks for the lifetime of the test."""
    client = TestClient(create_app(settings))
    client.__enter__()
    testcase.addCleanup(client.__exit__, None, None, None)
    return client
