"""API tests for /api/admin: role enforcement, account management and cascade delete."""

import unittest

from support import AppTestCase

from blog.core.roles import Role


class TestAdminAccess(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.make_account(name="Root", email="root@example.com", role=Role.ADMIN)
        self.alice = self.make_account()

    def test_admin_lists_all_accounts(self) -> None:
        self.act_as(self.admin)
        response = self.client.get("/api/admin/users")
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        emails = {u["email"] for u in body["users"]}
        self.assertEqual(emails, {"root@example.com", "alice@example.com"})
        self.assertEqual(body["pagination"]["totalItems"], 2)
        for user in body["users"]:
            self.assertNotIn("passwordHash", user)

    def test_non_admin_gets_403(self) -> None:
        self.act_as(self.alice)
        for method, path in (
            ("GET", "/api/admin/users"),
            ("POST", "/api/admin/users"),
            ("GET", "/api/admin/posts"),
            ("DELETE", f"/api/admin/users/{self.admin.id}"),
        ):
            response = self.client.request(method, path, json={})
            self.assertEqual(response.status_code, 403, path)
            self.assertEqual(response.json(), {"error": "Admin access required"})

    def test_anonymous_gets_401(self) -> None:
        self.act_as(None)
        response = self.client.get("/api/admin/users")
        self.assertEqual(response.status_code, 401)

    def test_admin_created_via_api_can_list_accounts(self) -> None:
        self.act_as(self.admin)
        created = self.client.post(
            "/api/admin/users",
            json={"name": "Second", "email": "second@example.com", "password": "abcdef", "role": "admin"},
        )
        self.assertEqual(created.status_code, 201, created.text)
        self.assertEqual(created.json()["user"]["role"], "admin")

        self.client.cookies.clear()
        login = self.client.post(
            "/api/auth/login", json={"email": "second@example.com", "password": "abcdef"}
        )
        self.assertEqual(login.status_code, 200)
        response = self.client.get("/api/admin/users")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["pagination"]["totalItems"], 3)


class TestAdminAccountManagement(AppTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.make_account(name="Root", email="root@example.com", role=Role.ADMIN)
        self.alice = self.make_account()
        self.act_as(self.admin)

    def test_create_defaults_to_user_role(self) -> None:
        response = self.client.post(
            "/api/admin/users",
            json={"name": "Bob", "email": "bob@example.com", "password": "abcdef"},
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["user"]["role"], "user")

    def test_create_rejects_unknown_role(self) -> None:
        response = self.client.post(
            "/api/admin/users",
            json={"name": "Bob", "email": "bob@example.com", "password": "abcdef", "role": "owner"},
        )
        self.assertEqual(response.status_code, 400)

    def test_create_duplicate_email_is_409(self) -> None:
        response = self.client.post(
            "/api/admin/users",
            json={"name": "Alice 2", "email": "alice@example.com", "password": "abcdef"},
        )
        self.assertEqual(response.status_code, 409)

    def test_update_user(self) -> None:
        response = self.client.put(
            f"/api/admin/users/{self.alice.id}", json={"name": "Alicia", "role": "admin"}
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["user"]["name"], "Alicia")
        self.assertEqual(response.json()["user"]["role"], "admin")

    def test_admin_accounts_cannot_be_modified_or_deleted(self) -> None:
        other_admin = self.make_account(name="Ops", email="ops@example.com", role=Role.ADMIN)
        update = self.client.put(f"/api/admin/users/{other_admin.id}", json={"role": "user"})
        self.assertEqual(update.status_code, 403)
        self.assertEqual(update.json(), {"error": "Admin accounts cannot be modified or deleted"})
        delete = self.client.delete(f"/api/admin/users/{other_admin.id}")
        self.assertEqual(delete.status_code, 403)

    def test_delete_cascades_to_posts(self) -> None:
        post = self.make_post(self.alice)
        self.act_as(self.admin)
        response = self.client.delete(f"/api/admin/users/{self.alice.id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(f"/api/posts/{post['id']}").status_code, 404)
        users = self.client.get("/api/admin/users").json()["users"]
        self.assertEqual([u["email"] for u in users], ["root@example.com"])

    def test_delete_missing_account_is_404(self) -> None:
        response = self.client.delete("/api/admin/users/999")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "User not found"})

    def test_account_id_beyond_integer_range_is_404(self) -> None:
        huge = 2**63
        update = self.client.put(f"/api/admin/users/{huge}", json={"name": "X"})
        self.assertEqual(update.status_code, 404)
        self.assertEqual(update.json(), {"error": "User not found"})
        self.assertEqual(self.client.delete(f"/api/admin/users/{huge}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/admin/posts/{huge}").status_code, 404)

    def test_admin_lists_all_posts(self) -> None:
        self.make_post(self.alice, title="One")
        self.make_post(self.admin, title="Two")
        self.act_as(self.admin)
        body = self.client.get("/api/admin/posts").json()
        self.assertEqual(body["pagination"]["totalItems"], 2)


class TestAdminModificationAllowed(AppTestCase):
    """With PREVENT_ADMIN_MODIFICATION off, admins may demote other admins."""

    settings_overrides = {"PREVENT_ADMIN_MODIFICATION": False}

    def test_demote_admin(self) -> None:
        admin = self.make_account(name="Root", email="root@example.com", role=Role.ADMIN)
        other = self.make_account(name="Ops", email="ops@example.com", role=Role.ADMIN)
        self.act_as(admin)
        response = self.client.put(f"/api/admin/users/{other.id}", json={"role": "user"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["role"], "user")


if __name__ == "__main__":
    unittest.main()
