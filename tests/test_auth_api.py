import json
import tempfile
import unittest
from pathlib import Path

from helpers import ADMIN_PASSWORD, make_settings, start_client


class AuthApiTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.data_dir = Path(tmp.name)

    def client(self):
        return start_client(self, make_settings(self.data_dir))

    def saved_users(self):
        return json.loads((self.data_dir / "users.json").read_text(encoding="utf-8"))

    def test_admin_is_seeded_once(self):
        self.client()
        self.client()

        admins = [u for u in self.saved_users() if u["id"] == "admin"]
        self.assertEqual(len(admins), 1)
        self.assertEqual(admins[0]["role"], "admin")

    def test_duplicate_admin_records_are_collapsed(self):
        (self.data_dir / "users.json").write_text(
            json.dumps(
                [
                    {"id": "admin", "nickname": "admin", "password": "a", "role": "admin"},
                    {"id": "admin", "nickname": "admin", "password": "b", "role": "admin"},
                ]
            ),
            encoding="utf-8",
        )
        client = self.client()

        self.assertEqual(len(self.saved_users()), 1)
        response = client.post("/api/login", json={"nickname": "admin", "password": "a"})
        self.assertTrue(response.json()["ok"])

    def test_admin_can_log_in(self):
        client = self.client()
        response = client.post(
            "/api/login", json={"nickname": "admin", "password": ADMIN_PASSWORD}
        )
        payload = response.json()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["user"]["role"], "admin")

    def test_signup_and_login(self):
        client = self.client()
        response = client.post(
            "/api/signup",
            json={"nickname": " alice ", "phone": "010-1234", "password": "secret"},
        )
        payload = response.json()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["user"]["nickname"], "alice")
        self.assertEqual(payload["user"]["role"], "user")
        self.assertNotIn("password", payload["user"])
        self.assertNotIn("passwordHash", payload["user"])

        response = client.post("/api/login", json={"nickname": "alice", "password": "secret"})
        payload = response.json()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["user"]["phone"], "010-1234")
        self.assertNotIn("password", payload["user"])

        response = client.post("/api/login", json={"nickname": "alice", "password": "wrong"})
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()["ok"])

    def test_password_is_not_stored_in_cleartext(self):
        client = self.client()
        client.post("/api/signup", json={"nickname": "alice", "password": "secret"})

        alice = next(u for u in self.saved_users() if u["nickname"] == "alice")
        self.assertNotIn("password", alice)
        self.assertNotIn("secret", alice["passwordHash"])

    def test_duplicate_nickname_is_rejected(self):
        client = self.client()
        first = client.post("/api/signup", json={"nickname": "alice", "password": "x"})
        second = client.post("/api/signup", json={"nickname": "alice", "password": "y"})
        self.assertTrue(first.json()["ok"])
        self.assertFalse(second.json()["ok"])

    def test_duplicate_phone_is_rejected(self):
        client = self.client()
        client.post("/api/signup", json={"nickname": "alice", "phone": "010", "password": "x"})
        response = client.post(
            "/api/signup", json={"nickname": "bob", "phone": "010", "password": "y"}
        )
        self.assertFalse(response.json()["ok"])

        # 전화번호 없이 가입하는 사람끼리는 충돌하지 않음
        client.post("/api/signup", json={"nickname": "carol", "password": "x"})
        response = client.post("/api/signup", json={"nickname": "dave", "password": "y"})
        self.assertTrue(response.json()["ok"])

    def test_admin_nickname_is_reserved(self):
        client = self.client()
        response = client.post("/api/signup", json={"nickname": "admin", "password": "x"})
        self.assertEqual(
            response.json(), {"ok": False, "error": "admin 닉네임은 사용할 수 없습니다."}
        )

    def test_signup_requires_nickname_and_password(self):
        client = self.client()
        for body in ({"nickname": "alice"}, {"password": "x"}, {"nickname": " ", "password": " "}):
            response = client.post("/api/signup", json=body)
            self.assertEqual(response.status_code, 200)
            self.assertFalse(response.json()["ok"])

    def test_users_are_listed_without_passwords(self):
        client = self.client()
        client.post("/api/signup", json={"nickname": "alice", "password": "secret"})

        users = client.get("/api/users").json()["users"]
        self.assertEqual({u["nickname"] for u in users}, {"admin", "alice"})
        for user in users:
            self.assertNotIn("password", user)
            self.assertNotIn("passwordHash", user)

    def test_legacy_cleartext_user_can_log_in(self):
        (self.data_dir / "users.json").write_text(
            json.dumps(
                [
                    {
                        "id": 1700000000000,
                        "nickname": "bob",
                        "phone": "010-9999",
                        "password": "pw",
                        "createdAt": "2024-01-01T00:00:00.000Z",
                    }
                ]
            ),
            encoding="utf-8",
        )
        client = self.client()

        response = client.post("/api/login", json={"nickname": "bob", "password": "pw"})
        payload = response.json()
        self.assertTrue(payload["ok"])
        self.assertEqual(payload["user"]["id"], "1700000000000")
        self.assertNotIn("password", payload["user"])


if __name__ == "__main__":
    unittest.main()
