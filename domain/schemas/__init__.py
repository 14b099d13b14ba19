"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    SignUpRequest,
    SignUpResponse,
    LoginRequest,
    SessionRestoreRequest,
    AuthSessionResponse,
    PasswordStrengthRequest,
    PasswordStrengthResponse,
    PasswordResetRequest,
    VerifyResetCodeRequest,
    RecoverySessionResponse,
    NewPasswordRequest,
)
from domain.schemas.profile_schemas import (
    UserInfoRequest,
    ProfileUpdateRequest,
    FitnessPreferencesRequest,
    ProfileResponse,
    IntakeResponse,
    SubscriptionRequest,
    SubscriptionResponse,
    PublicProfileResponse,
)
from domain.schemas.nutrition_schemas import (
    LogFoodRequest,
    MealResponse,
    MacroTotals,
    DailySummaryResponse,
    WaterUpdateRequest,
    WaterResponse,
    RecentFoodResponse,
    FoodSearchResult,
    GraphPoint,
    NutritionGraphResponse,
    NutritionOverviewResponse,
)
from domain.schemas.recipe_schemas import (
    IngredientItem,
    RecipeMealRequest,
    RecipeMealResponse,
)
from domain.schemas.meal_plan_schemas import (
    MealPlanSaveRequest,
    MealPlanSummary,
    MealPlanDetailResponse,
    AdminMealPlanResponse,
    BookmarkResponse,
    MealPlanRequestCreate,
    MealPlanRequestResponse,
)
from domain.schemas.community_schemas import (
    MomentCreate,
    MomentResponse,
    PrivacyUpdate,
    LikeToggleResponse,
    CommentCreate,
    CommentResponse,
    ReportCreate,
    ReportResponse,
    ReportedMomentResponse,
    ArticleCreate,
    ArticleResponse,
    ReviewRequest,
)
from domain.schemas.challenge_schemas import (
    ChallengeSaveRequest,
    ChallengeResponse,
    CommunityChallengesResponse,
    ChallengeDetailResponse,
    LeaderboardEntry,
    ProgressResponse,
    SubmissionCreate,
    SubmissionResponse,
    PendingSubmissionResponse,
)
from domain.schemas.admin_schemas import (
    AdminUserResponse,
    AdminUserUpdate,
    DashboardResponse,
)
