"""Request and response bodies.

Field names follow the camelCase keys the mobile/web clients send; the
Python attributes are snake_case with aliases.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class _ClientModel(BaseModel):
    """Base for client payloads: camelCase aliases, unknown keys dropped.

    Numeric ids are accepted for string fields and stored as strings.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class Task(_ClientModel):
    """A daily task attached to a goal."""

    id: Optional[str] = None
    day_number: Optional[Number] = Field(default=None, alias="dayNumber")
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_time_minutes: Optional[Number] = Field(default=None, alias="estimatedTimeMinutes")
    difficulty: Optional[str] = None
    video_requirements: Optional[str] = Field(default=None, alias="videoRequirements")
    credits_reward: Optional[Number] = Field(default=None, alias="creditsReward")
    is_selected: Optional[bool] = Field(default=None, alias="isSelected")
    status: Optional[str] = None
    verification_message: Optional[str] = Field(default=None, alias="verificationMessage")
    is_supplementary: Optional[bool] = Field(default=None, alias="isSupplementary")
    progress: Optional[Number] = None
    max_progress: Optional[Number] = Field(default=None, alias="maxProgress")
    time_left: Optional[Number] = Field(default=None, alias="timeLeft")
    last_updated: Optional[Number] = Field(default=None, alias="lastUpdated")
    is_timer_active: Optional[bool] = Field(default=None, alias="isTimerActive")
    source_lesson_id: Optional[str] = Field(default=None, alias="sourceLessonId")
    is_lesson_task: Optional[bool] = Field(default=None, alias="isLessonTask")


class Goal(_ClientModel):
    """Learning goal with its saved curriculum, courses, feed, products and videos.

    Saved collection items are catalogue entries whose shape is owned by the
    client, so they are stored as-is.
    """

    id: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    mode: Optional[str] = None
    summary: Optional[str] = None
    explanation: Optional[str] = None
    difficulty_profile: Optional[str] = Field(default=None, alias="difficultyProfile")
    duration_days: Optional[Number] = Field(default=None, alias="durationDays")
    created_at: Optional[Number] = Field(default=None, alias="createdAt")
    visual_url: Optional[str] = Field(default=None, alias="visualUrl")
    daily_questions: Optional[list[str]] = Field(default=None, alias="dailyQuestions")
    saved_tasks: Optional[list[Task]] = Field(default=None, alias="savedTasks")
    saved_curriculum: Optional[list[Any]] = Field(default=None, alias="savedCurriculum")
    saved_courses: Optional[list[Any]] = Field(default=None, alias="savedCourses")
    saved_feed: Optional[list[Any]] = Field(default=None, alias="savedFeed")
    saved_products: Optional[list[Any]] = Field(default=None, alias="savedProducts")
    saved_videos: Optional[list[Any]] = Field(default=None, alias="savedVideos")
    saved_day: Optional[Number] = Field(default=None, alias="savedDay")


class NotificationSettings(_ClientModel):
    daily_reminder: Optional[bool] = Field(default=None, alias="dailyReminder")
    task_reminder: Optional[bool] = Field(default=None, alias="taskReminder")
    streak_reminder: Optional[bool] = Field(default=None, alias="streakReminder")
    marketing_emails: Optional[bool] = Field(default=None, alias="marketingEmails")


class AuthRequest(_ClientModel):
    """Register (``isRegister``) or log in."""

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    country: Optional[str] = None
    is_register: bool = Field(default=False, alias="isRegister")


class SyncRequest(_ClientModel):
    """Partial profile update.

    Only the fields declared here can be synced. Omitted fields are left
    alone; fields sent as null are written as null. Account-owned state
    (premium status, balances, verification, connected OAuth accounts and
    ad reward transactions) is deliberately absent.
    """

    email: Optional[str] = None

    name: Optional[str] = None
    country: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    bio: Optional[str] = None
    privacy_accepted: Optional[bool] = Field(default=None, alias="privacyAccepted")
    user_profile: Optional[str] = Field(default=None, alias="userProfile")

    credits: Optional[Number] = None
    streak: Optional[Number] = None
    longest_streak: Optional[Number] = Field(default=None, alias="longestStreak")
    current_day: Optional[Number] = Field(default=None, alias="currentDay")
    total_xp: Optional[Number] = Field(default=None, alias="totalXP")
    level: Optional[Number] = None
    max_goal_slots: Optional[Number] = Field(default=None, alias="maxGoalSlots")
    last_check_in_date: Optional[Number] = Field(default=None, alias="lastCheckInDate")
    streak_freezes: Optional[Number] = Field(default=None, alias="streakFreezes")
    last_streak_update: Optional[Number] = Field(default=None, alias="lastStreakUpdate")
    push_token: Optional[str] = Field(default=None, alias="pushToken")

    goal: Optional[Goal] = None
    all_goals: Optional[list[Goal]] = Field(default=None, alias="allGoals")
    daily_tasks: Optional[list[Task]] = Field(default=None, alias="dailyTasks")
    completed_lesson_ids: Optional[list[str]] = Field(default=None, alias="completedLessonIds")
    completed_phase_ids: Optional[list[str]] = Field(default=None, alias="completedPhaseIds")
    notification_settings: Optional[NotificationSettings] = Field(
        default=None, alias="notificationSettings"
    )

    # Client-owned collections, stored as sent
    todo_list: Optional[list[dict[str, Any]]] = Field(default=None, alias="todoList")
    reminders: Optional[list[dict[str, Any]]] = None
    extra_logs: Optional[list[dict[str, Any]]] = Field(default=None, alias="extraLogs")
    history: Optional[list[dict[str, Any]]] = None
    chat_history: Optional[list[dict[str, Any]]] = Field(default=None, alias="chatHistory")
    guide_conversations: Optional[list[dict[str, Any]]] = Field(
        default=None, alias="guideConversations"
    )
    friends: Optional[list[dict[str, Any]]] = None
    friend_requests: Optional[list[dict[str, Any]]] = Field(default=None, alias="friendRequests")
    earn_tasks: Optional[list[dict[str, Any]]] = Field(default=None, alias="earnTasks")
    agent_alerts: Optional[list[dict[str, Any]]] = Field(default=None, alias="agentAlerts")
    my_courses: Optional[list[Any]] = Field(default=None, alias="myCourses")
    my_products: Optional[list[Any]] = Field(default=None, alias="myProducts")
    my_videos: Optional[list[Any]] = Field(default=None, alias="myVideos")
    purchase_history: Optional[list[dict[str, Any]]] = Field(default=None, alias="purchaseHistory")
    product_drafts: Optional[list[dict[str, Any]]] = Field(default=None, alias="productDrafts")
    content_drafts: Optional[list[dict[str, Any]]] = Field(default=None, alias="contentDrafts")
    email_campaigns: Optional[list[dict[str, Any]]] = Field(default=None, alias="emailCampaigns")
    analytics_snapshots: Optional[list[dict[str, Any]]] = Field(
        default=None, alias="analyticsSnapshots"
    )
    ecommerce_goal: Optional[dict[str, Any]] = Field(default=None, alias="ecommerceGoal")

    def to_patch(self) -> dict[str, Any]:
        """Fields the client actually sent, keyed by their stored names."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude={"email"})


class AuthResponse(BaseModel):
    user: dict[str, Any]
    token: str


class SyncResponse(BaseModel):
    success: bool


class UserResponse(BaseModel):
    user: dict[str, Any]
