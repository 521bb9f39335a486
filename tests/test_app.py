import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from fastapi.testclient import TestClient

import hany_realty.main as main
from hany_realty.dependencies import get_listing_store
from helpers import make_settings


class BrokenListingStore:
    backend_name = "file"

    def list_listings(self):
        raise RuntimeError("unexpected")


class AppFactoryTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = Path(tmp.name)

    def test_unexpected_errors_keep_the_envelope(self):
        app = main.create_app(make_settings(self.data_dir))
        app.dependency_overrides[get_listing_store] = BrokenListingStore
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/listings")
        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.json()["ok"])
        self.assertTrue(response.json()["error"])

    def test_no_app_is_built_at_import(self):
        self.assertFalse(hasattr(main, "app"))

    def test_run_uses_app_factory(self):
        with patch("uvicorn.run") as uvicorn_run:
            main.run()

        args, kwargs = uvicorn_run.call_args
        self.assertEqual(args[0], "hany_realty.main:create_app")
        self.assertTrue(kwargs["factory"])


if __name__ == "__main__":
    unittest.main()
