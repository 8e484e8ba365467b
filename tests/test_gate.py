"""Unit tests for blog.core.gate: path classification and the cookie-presence redirect."""

import unittest

from blog.core.gate import GateDecision, RouteTier, classify_path, gate_decision


class TestClassifyPath(unittest.TestCase):
    """Public is evaluated first; edit and create paths fall through to protected."""

    def test_public_literal_routes(self) -> None:
        for path in ("/", "/login", "/register", "/posts"):
            self.assertIs(classify_path(path), RouteTier.PUBLIC, path)

    def test_post_detail_is_public(self) -> None:
        self.assertIs(classify_path("/posts/123"), RouteTier.PUBLIC)
        self.assertIs(classify_path("/posts/abc"), RouteTier.PUBLIC)

    def test_post_edit_is_protected(self) -> None:
        self.assertIs(classify_path("/posts/edit/123"), RouteTier.PROTECTED)

    def test_post_create_is_protected(self) -> None:
        self.assertIs(classify_path("/posts/create"), RouteTier.PROTECTED)

    def test_protected_prefixes(self) -> None:
        for path in ("/dashboard", "/dashboard/stats", "/profile", "/profile/edit"):
            self.assertIs(classify_path(path), RouteTier.PROTECTED, path)

    def test_admin_prefix(self) -> None:
        for path in ("/admin", "/admin/users", "/admin/posts"):
            self.assertIs(classify_path(path), RouteTier.ADMIN, path)

    def test_unlisted_paths_are_not_gated(self) -> None:
        for path in ("/api/posts", "/api/admin/users", "/docs"):
            self.assertIs(classify_path(path), RouteTier.PUBLIC, path)


class TestGateDecision(unittest.TestCase):
    """Only token presence matters at this layer."""

    def test_protected_without_token_redirects(self) -> None:
        self.assertIs(gate_decision("/dashboard", False), GateDecision.REDIRECT_TO_LOGIN)
        self.assertIs(gate_decision("/posts/edit/1", False), GateDecision.REDIRECT_TO_LOGIN)

    def test_admin_without_token_redirects(self) -> None:
        self.assertIs(gate_decision("/admin/users", False), GateDecision.REDIRECT_TO_LOGIN)

    def test_any_token_is_let_through(self) -> None:
        self.assertIs(gate_decision("/dashboard", True), GateDecision.ALLOW)
        self.assertIs(gate_decision("/admin", True), GateDecision.ALLOW)

    def test_public_never_redirects(self) -> None:
        self.assertIs(gate_decision("/posts/123", False), GateDecision.ALLOW)
        self.assertIs(gate_decision("/", False), GateDecision.ALLOW)


if __name__ == "__main__":
    unittest.main()
