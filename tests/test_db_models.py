# tests/test_db_models.py
"""Schema-level guarantees enforced by the database itself."""

import pytest
from sqlalchemy.exc import IntegrityError

from stackit.models import Notification, User, Vote


def test_one_vote_per_user_and_target(db_session, test_question, other_user) -> None:
    db_session.add(Vote(user_id=other_user.id, target_id=test_question.id, target_type="question", vote_type="upvote"))
    db_session.commit()

    db_session.add(Vote(user_id=other_user.id, target_id=test_question.id, target_type="question", vote_type="downvote"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_same_id_on_different_target_types_is_allowed(db_session, other_user) -> None:
    db_session.add_all(
        [
            Vote(user_id=other_user.id, target_id=1, target_type="question", vote_type="upvote"),
            Vote(user_id=other_user.id, target_id=1, target_type="answer", vote_type="upvote"),
        ]
    )
    db_session.commit()


@pytest.mark.parametrize(
    ("target_type", "vote_type"),
    [("comment", "upvote"), ("question", "meh")],
)
def test_vote_enums_are_checked(db_session, other_user, target_type, vote_type) -> None:
    db_session.add(Vote(user_id=other_user.id, target_id=1, target_type=target_type, vote_type=vote_type))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_role_and_notification_type_are_checked(db_session, test_user) -> None:
    db_session.add(User(username="eve", password_hash="x", role="superuser"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    db_session.add(Notification(user_id=test_user.id, type="badge", message="nope"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_deleting_user_cascades_to_votes_and_notifications(db_session, test_question, other_user) -> None:
    db_session.add(Vote(user_id=other_user.id, target_id=test_question.id, target_type="question", vote_type="upvote"))
    db_session.add(Notification(user_id=other_user.id, type="vote", message="hi"))
    db_session.commit()

    db_session.delete(other_user)
    db_session.commit()

    assert db_session.query(Vote).count() == 0
    assert db_session.query(Notification).count() == 0
