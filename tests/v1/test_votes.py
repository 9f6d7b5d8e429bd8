# tests/v1/test_votes.py
"""Tests for vote-related endpoints."""

from fastapi import status
from sqlalchemy.exc import OperationalError

from stackit.repositories.vote_repo import VoteRepository


def _vote(client, headers, target_id, target_type="question", vote_type="upvote"):
    return client.post(
        "/api/v1/votes/",
        json={"target_id": target_id, "target_type": target_type, "vote_type": vote_type},
        headers=headers,
    )


def test_vote_requires_authentication(client, test_question) -> None:
    response = _vote(client, {}, test_question.id)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"success": False, "message": "Authentication required"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_vote_with_invalid_token(client, test_question) -> None:
    response = _vote(client, {"Authorization": "Bearer nope"}, test_question.id)

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Could not validate credentials"


def test_cast_upvote(client, other_auth_token, test_question) -> None:
    """Test casting an upvote on someone else's question."""
    response = _vote(client, other_auth_token, test_question.id)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "success": True,
        "message": "Vote added successfully",
        "vote_change": 1,
        "action": "added",
    }


def test_change_and_remove_vote(client, other_auth_token, test_question) -> None:
    _vote(client, other_auth_token, test_question.id, vote_type="upvote")

    changed = _vote(client, other_auth_token, test_question.id, vote_type="downvote")
    assert changed.json()["action"] == "changed"
    assert changed.json()["vote_change"] == -2

    removed = _vote(client, other_auth_token, test_question.id, vote_type="downvote")
    assert removed.json()["action"] == "removed"
    assert removed.json()["vote_change"] == 1

    question = client.get(f"/api/v1/questions/{test_question.id}").json()
    assert question["votes"] == 0


def test_vote_on_own_content_is_forbidden(client, auth_token, test_question) -> None:
    response = _vote(client, auth_token, test_question.id)

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json() == {"success": False, "message": "You cannot vote on your own content"}


def test_vote_invalid_type(client, other_auth_token, test_question) -> None:
    response = _vote(client, other_auth_token, test_question.id, vote_type="sideways")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Invalid vote type"


def test_vote_invalid_target_type(client, other_auth_token, test_question) -> None:
    response = _vote(client, other_auth_token, test_question.id, target_type="comment")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Invalid target type"


def test_vote_nonexistent_target(client, auth_token) -> None:
    response = _vote(client, auth_token, 99999, target_type="answer")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "answer not found"


def test_vote_storage_failure_is_internal_error(client, other_auth_token, test_question, monkeypatch) -> None:
    def _fail(self, *args, **kwargs):
        raise OperationalError("UPDATE questions", {}, Exception("database is locked"))

    monkeypatch.setattr(VoteRepository, "adjust_counter", _fail)

    response = _vote(client, other_auth_token, test_question.id)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"success": False, "message": "Internal server error"}


def test_bulk_votes(client, test_user, auth_token, test_question, test_answer) -> None:
    _vote(client, auth_token, test_answer.id, target_type="answer", vote_type="downvote")

    response = client.post(
        "/api/v1/votes/bulk",
        json={
            "targets": [
                {"id": test_answer.id, "type": "answer"},
                {"id": test_question.id, "type": "question"},
            ]
        },
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True, "votes": {f"answer_{test_answer.id}": "downvote"}}


def test_vote_stats_and_history(client, auth_token, test_answer) -> None:
    _vote(client, auth_token, test_answer.id, target_type="answer")

    stats = client.get("/api/v1/votes/stats", headers=auth_token).json()["stats"]
    assert stats["total_votes"] == 1
    assert stats["answer_votes"] == 1

    history = client.get("/api/v1/votes/history", params={"limit": 5}, headers=auth_token).json()
    assert history["pagination"]["total"] == 1
    [entry] = history["votes"]
    assert entry["target_type"] == "answer"
    assert entry["content_preview"] == test_answer.content


def test_top_voted_is_public(client, other_auth_token, test_question) -> None:
    _vote(client, other_auth_token, test_question.id)

    response = client.get("/api/v1/votes/top/question")
    assert response.status_code == status.HTTP_200_OK
    [top] = response.json()["content"]
    assert top["id"] == test_question.id
    assert top["author"] == "alice"

    assert client.get("/api/v1/votes/top/comment").status_code == status.HTTP_400_BAD_REQUEST


def test_my_vote(client, other_auth_token, test_question) -> None:
    url = f"/api/v1/votes/question/{test_question.id}/my-vote"
    assert client.get(url, headers=other_auth_token).json() == {"vote_type": None}

    _vote(client, other_auth_token, test_question.id)
    assert client.get(url, headers=other_auth_token).json() == {"vote_type": "upvote"}


def test_upvote_creates_notification_for_owner(client, auth_token, other_auth_token, test_question) -> None:
    _vote(client, other_auth_token, test_question.id)

    inbox = client.get("/api/v1/notifications/", headers=auth_token).json()
    [notification] = inbox["notifications"]
    assert notification["message"] == "bob upvoted your question"
    assert notification["related_id"] == test_question.id
