"""Unit tests for blog.core.roles: role parsing and the post ownership rule."""

import unittest

from blog.core.roles import Role, can_modify_post, is_admin, parse_role


class TestParseRole(unittest.TestCase):
    def test_known_values(self) -> None:
        self.assertIs(parse_role("admin"), Role.ADMIN)
        self.assertIs(parse_role("user"), Role.USER)
        self.assertIs(parse_role(Role.ADMIN), Role.ADMIN)

    def test_unknown_values(self) -> None:
        for value in ("Admin", "root", "", None, 1, ["admin"]):
            self.assertIsNone(parse_role(value))


class TestPostOwnership(unittest.TestCase):
    """An actor may modify a post iff they are an admin or its author."""

    def test_author_may_modify(self) -> None:
        self.assertTrue(can_modify_post(Role.USER, actor_id=5, author_id=5))

    def test_other_user_may_not_modify(self) -> None:
        self.assertFalse(can_modify_post(Role.USER, actor_id=6, author_id=5))

    def test_admin_may_modify_any_post(self) -> None:
        self.assertTrue(can_modify_post(Role.ADMIN, actor_id=1, author_id=5))

    def test_is_admin(self) -> None:
        self.assertTrue(is_admin(Role.ADMIN))
        self.assertFalse(is_admin(Role.USER))


if __name__ == "__main__":
    unittest.main()
