"""Integration tests for friend endpoints."""

from unittest.mock import MagicMock

from fastapi.testclient import TestClient
from postgrest.exceptions import APIError as PostgrestAPIError

from tests.helpers import ME, OTHER, friend_edge, make_response, sign_in_as


class TestFriendLists:
    """Tests for listing friends and pending requests."""

    def test_requires_authorization(self, client: TestClient) -> None:
        response = client.get("/api/v1/friends")

        assert response.status_code == 401

    def test_list_friends_with_usernames(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        sign_in_as(session_client)
        query = session_client.table.return_value.select.return_value.eq.return_value
        query.or_.return_value.execute.return_value = make_response([friend_edge(a=OTHER, b=ME)])
        query.maybe_single.return_value.execute.return_value = make_response({"username": "other"})

        response = client.get("/api/v1/friends", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["auth_id"] == OTHER
        assert data[0]["username"] == "other"
        assert data[0]["username_degraded"] is False
        assert data[0]["edge"]["state"] == "accepted"

    def test_list_friends_with_failed_username(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        """Test that a friend is still listed when its username cannot be read."""
        sign_in_as(session_client)
        query = session_client.table.return_value.select.return_value.eq.return_value
        query.or_.return_value.execute.return_value = make_response([friend_edge()])
        query.maybe_single.return_value.execute.side_effect = ConnectionError("timeout")

        response = client.get("/api/v1/friends", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["username"] is None
        assert response.json()[0]["username_degraded"] is True

    def test_list_friends_without_user(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.auth.get_user.return_value = None

        response = client.get("/api/v1/friends", headers=auth_headers)

        assert response.status_code == 401
        assert response.json()["message"] == "Not authenticated"

    def test_list_incoming(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        sign_in_as(session_client)
        query = session_client.table.return_value.select.return_value.eq.return_value
        query.neq.return_value.or_.return_value.execute.return_value = make_response(
            [friend_edge(requested_by=OTHER, state="pending")]
        )

        response = client.get("/api/v1/friends/incoming", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["requested_by"] == OTHER
        query.neq.assert_called_once_with("requested_by", ME)

    def test_list_outgoing(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        sign_in_as(session_client)
        query = session_client.table.return_value.select.return_value.eq.return_value
        query.eq.return_value.execute.return_value = make_response([friend_edge(state="pending")])

        response = client.get("/api/v1/friends/outgoing", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["state"] == "pending"

    def test_search(self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]) -> None:
        query = session_client.table.return_value.select.return_value.ilike
        query.return_value.limit.return_value.execute.return_value = make_response(
            [{"profile_id": 9, "username": "other", "badge_slug": None, "badge_url": None}]
        )

        response = client.get("/api/v1/friends/search", params={"q": "oth"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()[0]["username"] == "other"
        query.assert_called_once_with("username", "%oth%")
        query.return_value.limit.assert_called_once_with(10)


class TestFriendActions:
    """Tests for request, accept, decline and remove."""

    def test_send_request(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(friend_edge(state="pending"))

        response = client.post(f"/api/v1/friends/{OTHER}/request", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["state"] == "pending"
        session_client.rpc.assert_called_once_with("friend_request", {"target": OTHER})

    def test_accept_request(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(friend_edge(requested_by=OTHER))

        response = client.post(f"/api/v1/friends/{OTHER}/accept", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["state"] == "accepted"
        session_client.rpc.assert_called_once_with("friend_accept", {"other": OTHER})

    def test_decline_request(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(
            friend_edge(requested_by=OTHER, state="declined")
        )

        response = client.post(f"/api/v1/friends/{OTHER}/decline", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["state"] == "declined"

    def test_remove_friend(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        response = client.delete(f"/api/v1/friends/{OTHER}", headers=auth_headers)

        assert response.status_code == 204
        session_client.rpc.assert_called_once_with("friend_remove", {"_other": OTHER})

    def test_rejected_rpc_returns_remote_error(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        """Test that a procedure failure is reported as a 400."""
        session_client.rpc.return_value.execute.side_effect = PostgrestAPIError(
            {"message": "cannot friend yourself", "code": "P0001", "hint": None, "details": None}
        )

        response = client.post(f"/api/v1/friends/{ME}/request", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "remote_error"
        assert response.json()["message"] == "cannot friend yourself"


class TestInvites:
    """Tests for invite codes."""

    def test_create_invite(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(
            [{"code": "ABC123", "expires_at": "2024-01-01T01:00:00+00:00"}]
        )

        response = client.post("/api/v1/friends/invites", headers=auth_headers, json={"ttl_minutes": 30})

        assert response.status_code == 201
        assert response.json()["code"] == "ABC123"
        session_client.rpc.assert_called_once_with("friend_send_invite", {"ttl_minutes": 30})

    def test_create_invite_default_ttl(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(
            {"code": "ABC123", "expires_at": "2024-01-01T01:00:00+00:00"}
        )

        response = client.post("/api/v1/friends/invites", headers=auth_headers, json={})

        assert response.status_code == 201
        session_client.rpc.assert_called_once_with("friend_send_invite", {"ttl_minutes": 60})

    def test_create_invite_without_row(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response([])

        response = client.post("/api/v1/friends/invites", headers=auth_headers, json={})

        assert response.status_code == 500
        assert response.json()["error"] == "api_error"
        assert response.json()["message"] == "Invite was not created"

    def test_redeem_invalid_code(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(False)

        response = client.post("/api/v1/friends/invites/redeem", headers=auth_headers, json={"code": "nope"})

        assert response.status_code == 200
        assert response.json() == {"redeemed": False}
        session_client.rpc.assert_called_once_with("friend_redeem", {"_code": "nope"})

    def test_redeem_valid_code(
        self, client: TestClient, session_client: MagicMock, auth_headers: dict[str, str]
    ) -> None:
        session_client.rpc.return_value.execute.return_value = make_response(True)

        response = client.post("/api/v1/friends/invites/redeem", headers=auth_headers, json={"code": "ABC123"})

        assert response.json() == {"redeemed": True}
