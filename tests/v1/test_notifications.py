# tests/v1/test_notifications.py
"""Tests for notification inbox endpoints."""

from datetime import timedelta

import pytest
from fastapi import status

from stackit.db.time import utcnow
from stackit.models import Notification


@pytest.fixture()
def notifications(db_session, test_user, other_user):
    rows = [
        Notification(user_id=test_user.id, type="vote", message="bob upvoted your question", related_id=1),
        Notification(user_id=test_user.id, type="answer", message="bob answered your question", related_id=2),
        Notification(user_id=other_user.id, type="vote", message="alice upvoted your answer", related_id=3),
    ]
    db_session.add_all(rows)
    db_session.commit()
    return [row.id for row in rows]


def test_list_notifications(client, auth_token, notifications) -> None:
    response = client.get("/api/v1/notifications/", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [n["id"] for n in data["notifications"]] == [notifications[1], notifications[0]]
    assert data["pagination"] == {"total": 2, "limit": 20, "offset": 0, "has_more": False}


def test_list_notifications_by_type(client, auth_token, notifications) -> None:
    response = client.get("/api/v1/notifications/", params={"type": "answer"}, headers=auth_token)
    assert [n["type"] for n in response.json()["notifications"]] == ["answer"]

    bad = client.get("/api/v1/notifications/", params={"type": "badge"}, headers=auth_token)
    assert bad.status_code == status.HTTP_400_BAD_REQUEST


def test_notifications_require_auth(client) -> None:
    assert client.get("/api/v1/notifications/").status_code == status.HTTP_401_UNAUTHORIZED


def test_read_flow(client, auth_token, notifications) -> None:
    assert client.get("/api/v1/notifications/unread-count", headers=auth_token).json() == {"unread_count": 2}

    response = client.post(f"/api/v1/notifications/{notifications[0]}/read", headers=auth_token)
    assert response.json() == {"success": True, "message": "Notification marked as read"}
    assert client.get(f"/api/v1/notifications/{notifications[0]}", headers=auth_token).json()["is_read"] is True

    response = client.post("/api/v1/notifications/read-all", headers=auth_token)
    assert response.json()["count"] == 1
    assert client.get("/api/v1/notifications/unread-count", headers=auth_token).json() == {"unread_count": 0}


def test_cannot_touch_someone_elses_notification(client, auth_token, notifications) -> None:
    foreign = notifications[2]

    assert client.get(f"/api/v1/notifications/{foreign}", headers=auth_token).status_code == status.HTTP_404_NOT_FOUND
    read = client.post(f"/api/v1/notifications/{foreign}/read", headers=auth_token)
    assert read.status_code == status.HTTP_404_NOT_FOUND
    assert read.json()["message"] == "Notification not found or you do not have permission to modify it"
    assert client.delete(f"/api/v1/notifications/{foreign}", headers=auth_token).status_code == status.HTTP_404_NOT_FOUND


def test_delete_notifications(client, auth_token, other_auth_token, notifications) -> None:
    response = client.delete(f"/api/v1/notifications/{notifications[0]}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK

    response = client.delete("/api/v1/notifications/", headers=auth_token)
    assert response.json() == {"success": True, "deleted": 1}

    stats = client.get("/api/v1/notifications/stats", headers=other_auth_token).json()["stats"]
    assert stats["total_notifications"] == 1


def test_cleanup_is_admin_only(client, db_session, auth_token, admin_auth_token, test_user, notifications) -> None:
    db_session.add(
        Notification(
            user_id=test_user.id,
            type="vote",
            message="ancient",
            created_at=utcnow() - timedelta(days=90),
        )
    )
    db_session.commit()

    forbidden = client.post("/api/v1/notifications/cleanup", headers=auth_token)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN

    response = client.post("/api/v1/notifications/cleanup", params={"days_old": 60}, headers=admin_auth_token)
    assert response.json() == {"success": True, "deleted": 1}
