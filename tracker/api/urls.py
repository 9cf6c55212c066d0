from django.urls import path
from .views import (
    AcceptFriendRequestView,
    AvatarView,
    CompleteReviewView,
    DashboardView,
    DeclineFriendRequestView,
    FriendDetailView,
    FriendListView,
    FriendRequestListView,
    GoalDetailView,
    GoalListView,
    PendingReviewsView,
    ProfileView,
    QuizView,
    ReviewDetailView,
    SessionDetailView,
    StatisticsView,
    StudySessionView,
    SubjectDetailView,
    SubjectListView,
    UpdateDisplayNameView,
    UserSearchView,
    WeeklyRankingView,
    WeeklyRecordView,
)

urlpatterns = [
    path("subjects", SubjectListView.as_view(), name="subjects"),
    path("subjects/<uuid:subject_id>", SubjectDetailView.as_view(), name="subject-detail"),
    path("goals", GoalListView.as_view(), name="goals"),
    path("goals/<uuid:goal_id>", GoalDetailView.as_view(), name="goal-detail"),
    path("sessions", StudySessionView.as_view(), name="sessions"),
    path("sessions/<uuid:session_id>", SessionDetailView.as_view(), name="session-detail"),
    path("reviews", PendingReviewsView.as_view(), name="reviews"),
    path("reviews/<uuid:review_id>/complete", CompleteReviewView.as_view(), name="review-complete"),
    path("reviews/<uuid:review_id>", ReviewDetailView.as_view(), name="review-detail"),
    path("profile", ProfileView.as_view(), name="profile"),
    path("profile/avatar", AvatarView.as_view(), name="avatar"),
    path("profile/weekly-record", WeeklyRecordView.as_view(), name="weekly-record"),
    path("dashboard", DashboardView.as_view(), name="dashboard"),
    path("statistics", StatisticsView.as_view(), name="statistics"),
    path("friends", FriendListView.as_view(), name="friends"),
    path("friends/requests", FriendRequestListView.as_view(), name="friend-requests"),
    path("friends/requests/<uuid:user_id>/accept", AcceptFriendRequestView.as_view(), name="friend-accept"),
    path("friends/requests/<uuid:user_id>/decline", DeclineFriendRequestView.as_view(), name="friend-decline"),
    path("friends/<uuid:user_id>", FriendDetailView.as_view(), name="friend-detail"),
    path("users/search", UserSearchView.as_view(), name="user-search"),
    path("ranking/weekly", WeeklyRankingView.as_view(), name="weekly-ranking"),
    path("quiz", QuizView.as_view(), name="quiz"),
    path("functions/update-display-name", UpdateDisplayNameView.as_view(), name="update-display-name"),
]
