"""Back-office routes; every endpoint requires an Admin or Super Admin"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_admin
from domain.helpers import utcnow
from domain.models import User
from domain.schemas.admin_schemas import (
    AdminUserResponse,
    AdminUserUpdate,
    DashboardResponse,
)
from domain.schemas.challenge_schemas import (
    ChallengeSaveRequest,
    ChallengeResponse,
    PendingSubmissionResponse,
    SubmissionResponse,
)
from domain.schemas.community_schemas import (
    ArticleResponse,
    ReportedMomentResponse,
    ReviewRequest,
)
from domain.schemas.meal_plan_schemas import (
    AdminMealPlanResponse,
    MealPlanRequestResponse,
    MealPlanSaveRequest,
)
from domain.schemas.recipe_schemas import RecipeMealRequest, RecipeMealResponse
from services.admin_service import AdminService
from services.article_service import ArticleService
from services.challenge_service import ChallengeService
from services.meal_plan_service import MealPlanService
from services.moderation_service import ModerationService
from services.recipe_service import RecipeService

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("fitnesshub.api.admin")


# ---------------------------------------------------------------------------
# Dashboard and users
# ---------------------------------------------------------------------------


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return AdminService.dashboard(db, utcnow())


@router.get("/users", response_model=List[AdminUserResponse])
def list_users(
    search: Optional[str] = Query(None, max_length=100),
    sort_by: str = Query("username", pattern="^(username|email|role)$"),
    descending: bool = False,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return AdminService.list_users(db, search, sort_by, descending)


@router.patch("/users/{user_id}", response_model=AdminUserResponse)
def edit_user(
    user_id: UUID,
    payload: AdminUserUpdate,
    actor: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return AdminService.edit_user(db, actor, user_id, payload)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    actor: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    AdminService.delete_user(db, actor, user_id)


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


@router.get("/reports", response_model=List[ReportedMomentResponse])
def reported_moments(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ModerationService.reported_moments(db)


@router.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_report(
    report_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ModerationService.dismiss_report(db, report_id)


@router.delete("/moments/{moment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reported_moment(
    moment_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ModerationService.delete_reported_moment(db, moment_id)


@router.get("/articles/pending", response_model=List[ArticleResponse])
def pending_articles(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ArticleService.pending_articles(db)


@router.post("/articles/{article_id}/review", response_model=ArticleResponse)
def review_article(
    article_id: int,
    payload: ReviewRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ArticleService.review_article(db, article_id, payload.decision)


# ---------------------------------------------------------------------------
# Recipes and meal plans
# ---------------------------------------------------------------------------


@router.get("/recipes", response_model=List[RecipeMealResponse])
def list_recipes(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return [RecipeService.to_dict(r) for r in RecipeService.list_recipes(db)]


@router.get("/recipes/{recipe_id}", response_model=RecipeMealResponse)
def get_recipe(
    recipe_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return RecipeService.to_dict(RecipeService.get_recipe(db, recipe_id))


@router.post(
    "/recipes", response_model=RecipeMealResponse, status_code=status.HTTP_201_CREATED
)
def create_recipe(
    payload: RecipeMealRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return RecipeService.to_dict(RecipeService.save_recipe(db, payload))


@router.put("/recipes/{recipe_id}", response_model=RecipeMealResponse)
def update_recipe(
    recipe_id: int,
    payload: RecipeMealRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return RecipeService.to_dict(RecipeService.save_recipe(db, payload, recipe_id))


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    RecipeService.delete_recipe(db, recipe_id)


@router.get("/meal-plans", response_model=List[AdminMealPlanResponse])
def list_meal_plans(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return MealPlanService.admin_list(db)


@router.post(
    "/meal-plans",
    response_model=AdminMealPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_meal_plan(
    payload: MealPlanSaveRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return MealPlanService.admin_view(MealPlanService.save_meal_plan(db, payload))


@router.put("/meal-plans/{plan_id}", response_model=AdminMealPlanResponse)
def update_meal_plan(
    plan_id: int,
    payload: MealPlanSaveRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    plan = MealPlanService.save_meal_plan(db, payload, plan_id)
    return MealPlanService.admin_view(plan)


@router.delete("/meal-plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(
    plan_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    MealPlanService.delete_meal_plan(db, plan_id)


@router.get("/meal-plan-requests", response_model=List[MealPlanRequestResponse])
def meal_plan_requests(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return MealPlanService.pending_requests(db)


@router.get("/meal-plan-requests/count")
def meal_plan_request_count(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return {"pending": MealPlanService.pending_request_count(db)}


# ---------------------------------------------------------------------------
# Challenges
# ---------------------------------------------------------------------------


@router.get("/challenges", response_model=List[ChallengeResponse])
def list_challenges(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ChallengeService.list_challenges(db, utcnow())


@router.post(
    "/challenges", response_model=ChallengeResponse, status_code=status.HTTP_201_CREATED
)
def create_challenge(
    payload: ChallengeSaveRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    challenge = ChallengeService.save_challenge(db, payload)
    return ChallengeService.to_dict(challenge, utcnow())


@router.put("/challenges/{challenge_id}", response_model=ChallengeResponse)
def edit_challenge(
    challenge_id: int,
    payload: ChallengeSaveRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    challenge = ChallengeService.save_challenge(db, payload, challenge_id)
    return ChallengeService.to_dict(challenge, utcnow())


@router.delete("/challenges/{challenge_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_challenge(
    challenge_id: int,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    ChallengeService.delete_challenge(db, challenge_id)


@router.get("/submissions", response_model=List[PendingSubmissionResponse])
def pending_submissions(_: User = Depends(require_admin), db: Session = Depends(get_db)):
    return ChallengeService.pending_submissions(db)


@router.post("/submissions/{submission_id}/review", response_model=SubmissionResponse)
def review_submission(
    submission_id: int,
    payload: ReviewRequest,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ChallengeService.review_submission(db, submission_id, payload.decision)
