"""
Route tests: services are monkeypatched, the caller comes from auth overrides.
"""

import uuid
from datetime import date, datetime, timezone
from types import SimpleNamespace

from test_fixtures import client, make_user, login_as, auth_user, admin_user  # noqa: F401
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.enums import ChallengeStatus, GraphPeriod, NextStep, UserRole
from main import app
from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.nutrition_service import NutritionService
from services.food_search_service import FoodSearchService
from services.meal_plan_service import MealPlanService
from services.moment_service import MomentService
from services.challenge_service import ChallengeService
from services.admin_service import AdminService
from services.recipe_service import RecipeService


def test_health_check():
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "FitnessHub"}


def test_request_id_headers():
    r = client.get("/health-check")
    assert r.headers["X-Request-ID"]
    assert float(r.headers["X-Process-Time"]) >= 0


# =============================================================================
# AUTH
# =============================================================================


def test_sign_up_returns_created(monkeypatch):
    uid = uuid.uuid4()

    def fake_sign_up(db, email, password, confirm_password):
        assert confirm_password == password
        return SimpleNamespace(id=uid, email=email)

    monkeypatch.setattr(AuthService, "sign_up", staticmethod(fake_sign_up))
    r = client.post(
        "/auth/sign-up",
        json={"email": "new@example.com", "password": "Abc!23", "confirm_password": "Abc!23"},
    )
    assert r.status_code == 201
    assert r.json()["user_id"] == str(uid)


def test_sign_up_duplicate_email_is_conflict(monkeypatch):
    from app.exceptions import ConflictError

    def fake_sign_up(*args):
        raise ConflictError("Email already exists. Please log in.")

    monkeypatch.setattr(AuthService, "sign_up", staticmethod(fake_sign_up))
    r = client.post("/auth/sign-up", json={"email": "a@b.c", "password": "x", "confirm_password": "x"})
    assert r.status_code == 409
    body = r.json()
    assert body["success"] is False
    assert body["error"]["message"] == "Email already exists. Please log in."


def test_password_strength_route():
    r = client.post("/auth/password-strength", json={"password": "Secret1!"})
    assert r.status_code == 200
    assert r.json()["strength"] == "Strong"


def test_login_returns_next_step(monkeypatch):
    uid = uuid.uuid4()

    def fake_login(db, email, password, remember_me):
        return {
            "user_id": str(uid),
            "email": email,
            "access_token": "access",
            "refresh_token": "refresh",
            "expires_at": 1700000000,
            "role": 1,
            "next_step": NextStep.ONBOARDING,
            "remember_me": remember_me,
        }

    monkeypatch.setattr(AuthService, "login", staticmethod(fake_login))
    r = client.post(
        "/auth/login",
        json={"email": "sarah@example.com", "password": "pw", "remember_me": True},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["next_step"] == "onboarding"
    assert data["remember_me"] is True


def test_missing_bearer_token_is_unauthorized():
    app.dependency_overrides.clear()
    r = client.get("/profile")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


def test_bearer_token_resolves_current_user(monkeypatch):
    user = make_user()
    captured = {}

    def fake_current_user(db, token):
        captured["token"] = token
        return user

    monkeypatch.setattr(AuthService, "current_user", staticmethod(fake_current_user))
    r = client.get("/profile", headers={"Authorization": "Bearer abc.def"})
    assert r.status_code == 200
    assert captured["token"] == "abc.def"
    assert r.json()["goal_label"] == "Weight Loss"


# =============================================================================
# PROFILE
# =============================================================================


def test_get_profile_has_bmi_and_labels(auth_user):
    r = client.get("/profile")
    assert r.status_code == 200
    data = r.json()
    assert data["bmi"] == round(62 / (1.68 * 1.68), 1)
    assert data["activity_level_label"] == "Moderately Active"
    assert data["gender_label"] == "Female"


def test_save_user_info_validation_error(monkeypatch, auth_user):
    def fake_save(db, user_id, email, data):
        raise ServiceValidationError("Please fill in all the fields.")

    monkeypatch.setattr(ProfileService, "save_user_info", staticmethod(fake_save))
    r = client.put("/profile/user-info", json={"age": 20})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Please fill in all the fields."


def test_upgrade_subscription(monkeypatch, auth_user):
    def fake_upgrade(db, user, plan):
        return {"plan": plan, "amount": 47990, "currency": "myr", "is_premium": True}

    monkeypatch.setattr(ProfileService, "upgrade_subscription", staticmethod(fake_upgrade))
    r = client.post("/profile/subscription", json={"plan": "yearly"})
    assert r.status_code == 200
    assert r.json() == {"plan": "yearly", "amount": 47990, "currency": "myr", "is_premium": True}


def test_public_profile_pads_grid(monkeypatch, auth_user):
    other = uuid.uuid4()

    def fake_public(db, user_id):
        return {
            "user_id": user_id,
            "username": "mike_lifts",
            "profile_picture": None,
            "moments": [{"id": 1, "image_base64": "abc", "caption": "Leg day"}, None, None],
            "articles": [],
        }

    monkeypatch.setattr(ProfileService, "public_profile", staticmethod(fake_public))
    r = client.get(f"/users/{other}")
    assert r.status_code == 200
    assert r.json()["moments"][1:] == [None, None]


# =============================================================================
# NUTRITION
# =============================================================================


def test_log_food_rejects_unknown_meal_type(auth_user):
    r = client.post(
        "/nutrition/meals",
        json={"date": "2025-03-01", "meal_type": "Brunch", "food_item_name": "Eggs"},
    )
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


def test_log_food_accepts_lowercase_meal_type(monkeypatch, auth_user):
    def fake_log(db, user, data):
        assert data.meal_type.value == "Breakfast"
        return SimpleNamespace(
            id=7,
            meal_type=data.meal_type.value,
            food_item_name=data.food_item_name,
            calories=data.calories * data.quantity,
            protein=data.protein * data.quantity,
            carbs=data.carbs * data.quantity,
            fats=data.fats * data.quantity,
            quantity=data.quantity,
        )

    monkeypatch.setattr(NutritionService, "log_food", staticmethod(fake_log))
    r = client.post(
        "/nutrition/meals",
        json={
            "date": "2025-03-01",
            "meal_type": "breakfast",
            "food_item_name": "Boiled egg",
            "calories": 78,
            "protein": 6,
            "carbs": 0.6,
            "fats": 5,
            "quantity": 2,
        },
    )
    assert r.status_code == 201
    assert r.json()["calories"] == 156


def test_food_search_route(monkeypatch, auth_user):
    monkeypatch.setattr(
        FoodSearchService,
        "search",
        staticmethod(
            lambda db, q: [
                {"name": "Oat Porridge", "calories": 150, "protein": 5, "carbs": 27,
                 "fats": 3, "source": "recipe", "external_id": 2},
            ]
        ),
    )
    r = client.get("/nutrition/foods/search", params={"q": "oat"})
    assert r.status_code == 200
    assert r.json()[0]["source"] == "recipe"


def test_nutrition_graph_route_passes_period(monkeypatch, auth_user):
    seen = {}

    def fake_graph(db, user, period, today):
        seen["period"] = period
        seen["today"] = today
        return [{"label": "Week 1", "calories": 1800, "protein": 90, "carbs": 200, "fats": 60}]

    monkeypatch.setattr(NutritionService, "nutrition_graph", staticmethod(fake_graph))
    r = client.get("/nutrition/graph", params={"period": "Weekly", "today": "2025-03-12"})
    assert r.status_code == 200
    assert seen == {"period": GraphPeriod.WEEKLY, "today": date(2025, 3, 12)}
    assert r.json()["points"][0]["label"] == "Week 1"


# =============================================================================
# MEAL PLANS AND MOMENTS
# =============================================================================


def test_locked_meal_plan_is_forbidden(monkeypatch, auth_user):
    def fake_detail(db, user, plan_id):
        raise ForbiddenError("This meal plan is available to premium members only.")

    monkeypatch.setattr(MealPlanService, "meal_plan_detail", staticmethod(fake_detail))
    r = client.get("/meal-plans/3")
    assert r.status_code == 403
    assert r.json()["error"]["message"] == "This meal plan is available to premium members only."


def test_toggle_like_route(monkeypatch, auth_user):
    monkeypatch.setattr(
        MomentService,
        "toggle_like",
        staticmethod(lambda db, user, moment_id: {"moment_id": moment_id, "liked": True, "like_count": 4}),
    )
    r = client.post("/moments/12/like")
    assert r.status_code == 200
    assert r.json() == {"moment_id": 12, "liked": True, "like_count": 4}


def test_moment_not_found(monkeypatch, auth_user):
    def fake_detail(db, user, moment_id):
        raise NotFoundError(f"Moment {moment_id} not found")

    monkeypatch.setattr(MomentService, "moment_detail", staticmethod(fake_detail))
    r = client.get("/moments/99")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_community_challenges_route(monkeypatch, auth_user):
    now = datetime(2025, 3, 1, tzinfo=timezone.utc)
    challenge = {
        "id": 1,
        "title": "30 Day Plank",
        "description": "Hold a plank",
        "content": "Daily",
        "start_date": now,
        "end_date": now,
        "max_participants": None,
        "no_limit": True,
        "difficulty": "Beginner",
        "target_audience": "Everyone",
        "status": ChallengeStatus.ONGOING,
        "time_progress": 50.0,
        "tasks": [{"id": 1, "task_name": "Day 1", "task_description": "30s"}],
    }
    monkeypatch.setattr(
        ChallengeService,
        "community_challenges",
        staticmethod(lambda db, now: {"current": [challenge], "upcoming": []}),
    )
    r = client.get("/challenges")
    assert r.status_code == 200
    assert r.json()["current"][0]["status"] == "Ongoing"


# =============================================================================
# ADMIN
# =============================================================================


def test_admin_routes_require_admin_role(auth_user):
    r = client.get("/admin/dashboard")
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "FORBIDDEN"


def test_admin_dashboard(monkeypatch, admin_user):
    counts = {
        "total_users": 12,
        "active_challenges": 2,
        "reported_moments": 1,
        "pending_articles": 3,
        "meal_plans": 4,
        "recipe_meals": 9,
        "pending_meal_plan_requests": 0,
        "pending_submissions": 5,
    }
    monkeypatch.setattr(AdminService, "dashboard", staticmethod(lambda db, now: counts))
    r = client.get("/admin/dashboard")
    assert r.status_code == 200
    assert r.json() == counts


def test_admin_users_rejects_unknown_sort(admin_user):
    r = client.get("/admin/users", params={"sort_by": "password"})
    assert r.status_code == 422


def test_admin_recipe_validation_message(monkeypatch, admin_user):
    def fake_save(db, data, recipe_id=None):
        raise ServiceValidationError("Please add at least one ingredient.")

    monkeypatch.setattr(RecipeService, "save_recipe", staticmethod(fake_save))
    r = client.post("/admin/recipes", json={"name": "Salad"})
    assert r.status_code == 400
    assert r.json()["error"]["message"] == "Please add at least one ingredient."


def test_role_change_by_plain_admin_is_forbidden(monkeypatch, admin_user):
    def fake_edit(db, actor, user_id, data):
        assert actor.role == UserRole.ADMIN.value
        raise ForbiddenError("Only a Super Admin can change user roles.")

    monkeypatch.setattr(AdminService, "edit_user", staticmethod(fake_edit))
    r = client.patch(f"/admin/users/{uuid.uuid4()}", json={"role": 2})
    assert r.status_code == 403
