"""
ProfileService tests on a real SQLite session.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from test_fixtures import db_session, create_user, unique_email  # noqa: F401
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import ApprovalStatus, SubscriptionPlan
from domain.mappers import UserMapper
from domain.models import Article, Moment, User
from domain.schemas.profile_schemas import (
    FitnessPreferencesRequest,
    ProfileUpdateRequest,
    UserInfoRequest,
)
from services.profile_service import ProfileService


def onboarding_form(**overrides):
    fields = dict(
        username="sarah_fit",
        age="29",
        height="168",
        weight="62",
        gender="female",
        country="Malaysia",
        goal="weight_loss",
        fitness_level="beginner",
        activity_level="lightly_active",
    )
    fields.update(overrides)
    return UserInfoRequest(**fields)


def test_save_user_info_inserts_missing_row(db_session: Session):
    uid = uuid.uuid4()
    email = unique_email("sarah")

    user = ProfileService.save_user_info(db_session, uid, email, onboarding_form())

    assert user.id == uid
    assert (user.age, user.height, user.weight) == (29, 168, 62)
    assert user.activity_level == "lightly_active"
    assert user.role == 1


def test_save_user_info_updates_existing_row(db_session: Session):
    existing = create_user(db_session, weight=None, height=None, age=None, username=None)

    user = ProfileService.save_user_info(
        db_session, existing.id, None, onboarding_form(username=None, country=None)
    )

    assert user.id == existing.id
    assert user.weight == 62
    assert user.username is None
    assert db_session.query(User).count() == 1


def test_save_user_info_requires_fields(db_session: Session):
    with pytest.raises(ServiceValidationError) as exc:
        ProfileService.save_user_info(
            db_session, uuid.uuid4(), "x@example.com", onboarding_form(goal=None)
        )
    assert exc.value.message == "Please fill in all the fields."


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("weight", "29", "Please enter a valid weight between 30kg and 300kg."),
        ("weight", "62.5", "Please enter a valid weight between 30kg and 300kg."),
        ("height", "251", "Please enter a valid height between 50cm and 250cm."),
        ("age", "9", "Please enter a valid age between 10 and 120."),
    ],
)
def test_body_metric_ranges(db_session: Session, field, value, message):
    with pytest.raises(ServiceValidationError) as exc:
        ProfileService.save_user_info(
            db_session, uuid.uuid4(), "x@example.com", onboarding_form(**{field: value})
        )
    assert exc.value.message == message


def test_body_metric_bounds_are_inclusive():
    assert ProfileService.parse_body_metric("weight", 30) == 30
    assert ProfileService.parse_body_metric("weight", "300") == 300
    assert ProfileService.parse_body_metric("age", " 120 ") == 120


def test_calculate_bmi():
    assert ProfileService.calculate_bmi(70, 175) == 22.9
    assert ProfileService.calculate_bmi(None, 175) is None
    assert ProfileService.calculate_bmi(70, None) is None


def test_profile_mapper_labels(db_session: Session):
    user = create_user(db_session, goal="general_fitness", gender=None)
    response = UserMapper.to_response(user)
    assert response.goal_label == "General Fitness"
    assert response.gender_label == "Not set"
    assert response.bmi == 22.9


def test_update_profile_partial(db_session: Session):
    user = create_user(db_session)

    updated = ProfileService.update_profile(
        db_session, user, ProfileUpdateRequest(weight="68", country="Singapore")
    )

    assert updated.weight == 68
    assert updated.country == "Singapore"
    assert updated.height == 175


def test_update_profile_range_check(db_session: Session):
    user = create_user(db_session)
    with pytest.raises(ServiceValidationError):
        ProfileService.update_profile(db_session, user, ProfileUpdateRequest(height=20))


def test_update_fitness_preferences(db_session: Session):
    user = create_user(db_session)
    updated = ProfileService.update_fitness_preferences(
        db_session, user, FitnessPreferencesRequest(goal="endurance", activity_level="very_active")
    )
    assert updated.goal == "endurance"
    assert updated.activity_level == "very_active"
    assert updated.fitness_level == "intermediate"


def test_upgrade_subscription(db_session: Session):
    user = create_user(db_session)

    result = ProfileService.upgrade_subscription(db_session, user, SubscriptionPlan.MONTHLY)

    assert result == {
        "plan": SubscriptionPlan.MONTHLY,
        "amount": 4990,
        "currency": "myr",
        "is_premium": True,
    }
    assert db_session.get(User, user.id).is_premium is True
    assert ProfileService.subscription_price(SubscriptionPlan.YEARLY) == 47990


def test_pad_grid():
    assert ProfileService.pad_grid([1, 2, 3, 4]) == [1, 2, 3, 4, None, None]
    assert ProfileService.pad_grid([1, 2, 3]) == [1, 2, 3]
    assert ProfileService.pad_grid([]) == []


def test_public_profile(db_session: Session):
    owner = create_user(db_session, username="mike_lifts")
    now = datetime.now(timezone.utc)
    db_session.add_all(
        [
            Moment(user_id=owner.id, caption="old", image_base64="a", created_at=now - timedelta(days=2)),
            Moment(user_id=owner.id, caption="new", image_base64="b", created_at=now),
            Moment(user_id=owner.id, caption="hidden", image_base64="c", is_private=True, created_at=now),
            Article(user_id=owner.id, title="Approved", content="x", approval_status=ApprovalStatus.APPROVE.value),
            Article(user_id=owner.id, title="Pending", content="y"),
        ]
    )
    db_session.commit()

    profile = ProfileService.public_profile(db_session, owner.id)

    assert profile["username"] == "mike_lifts"
    assert [m["caption"] for m in profile["moments"][:2]] == ["new", "old"]
    assert profile["moments"][2] is None
    assert len(profile["moments"]) == 3
    assert [a.title for a in profile["articles"]] == ["Approved"]


def test_public_profile_unknown_user(db_session: Session):
    with pytest.raises(NotFoundError):
        ProfileService.public_profile(db_session, uuid.uuid4())
