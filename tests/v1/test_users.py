# tests/v1/test_users.py
"""Tests for user registration and role management."""

from fastapi import status


def test_register_user(client) -> None:
    response = client.post(
        "/api/v1/users/",
        json={"username": "dave", "password": "hunter22"},
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["username"] == "dave"
    assert data["role"] == "user"
    assert "password_hash" not in data


def test_register_ignores_client_role(client) -> None:
    response = client.post(
        "/api/v1/users/",
        json={"username": "mallory", "password": "hunter22", "role": "admin"},
    )
    assert response.json()["role"] == "user"


def test_register_duplicate_username(client, test_user) -> None:
    response = client.post(
        "/api/v1/users/",
        json={"username": "alice", "password": "hunter22"},
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Username already exists"


def test_register_invalid_username(client) -> None:
    response = client.post(
        "/api/v1/users/",
        json={"username": "no spaces!", "password": "hunter22"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_get_user(client, test_user) -> None:
    response = client.get(f"/api/v1/users/{test_user.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["username"] == "alice"

    assert client.get("/api/v1/users/4242").status_code == status.HTTP_404_NOT_FOUND


def test_admin_updates_role(client, admin_auth_token, test_user) -> None:
    response = client.put(
        f"/api/v1/users/{test_user.id}/role",
        json={"role": "guest"},
        headers=admin_auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["role"] == "guest"


def test_non_admin_cannot_update_role(client, auth_token, other_user) -> None:
    response = client.put(
        f"/api/v1/users/{other_user.id}/role",
        json={"role": "admin"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["message"] == "Access denied. Required role: admin"


def test_update_role_rejects_unknown_role(client, admin_auth_token, test_user) -> None:
    response = client.put(
        f"/api/v1/users/{test_user.id}/role",
        json={"role": "superuser"},
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_role_missing_user(client, admin_auth_token) -> None:
    response = client.put(
        "/api/v1/users/4242/role",
        json={"role": "guest"},
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_user_stats(
    client, auth_token, other_auth_token, test_user, other_user, test_question, test_answer
) -> None:
    for headers, target_id, target_type, vote_type in [
        (other_auth_token, test_question.id, "question", "upvote"),
        (auth_token, test_answer.id, "answer", "downvote"),
    ]:
        client.post(
            "/api/v1/votes/",
            json={"target_id": target_id, "target_type": target_type, "vote_type": vote_type},
            headers=headers,
        )
    client.post(
        f"/api/v1/questions/{test_question.id}/accept",
        json={"answer_id": test_answer.id},
        headers=auth_token,
    )

    response = client.get(f"/api/v1/users/{other_user.id}/stats", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "stats": {
            "questions_asked": 0,
            "answers_provided": 1,
            "votes_cast": 1,
            "accepted_answers": 1,
            "question_votes": 0,
            "answer_votes": -1,
        },
    }

    stats = client.get(f"/api/v1/users/{test_user.id}/stats", headers=auth_token).json()["stats"]
    assert stats["questions_asked"] == 1
    assert stats["votes_cast"] == 1
    assert stats["question_votes"] == 1
    assert stats["accepted_answers"] == 0


def test_user_stats_for_new_user(client, auth_token, test_user) -> None:
    stats = client.get(f"/api/v1/users/{test_user.id}/stats", headers=auth_token).json()["stats"]
    assert set(stats.values()) == {0}


def test_user_stats_requires_authentication(client, test_user) -> None:
    response = client.get(f"/api/v1/users/{test_user.id}/stats")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_user_stats_missing_user(client, auth_token) -> None:
    response = client.get("/api/v1/users/4242/stats", headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "User not found"
