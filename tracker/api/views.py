from rest_framework import views, status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
import structlog
import uuid
from ..data.models import Goal, Subject
from ..errors import DisplayNameInvalid, DisplayNameTaken
from ..services import dashboard, gamification, profiles, quiz, social, statistics, subjects
from ..services.reviews import complete_review, delete_review, list_pending_reviews
from ..services.sessions import delete_session, list_sessions, record_study_session
from ..utils.time import to_local_iso
from .serializers import (
    AvatarSerializer,
    DueQuerySerializer,
    FriendRequestInSerializer,
    GoalSerializer,
    ProfileSerializer,
    PublicProfileSerializer,
    QuizInSerializer,
    ReviewCompleteSerializer,
    ReviewSerializer,
    SearchQuerySerializer,
    SearchResultSerializer,
    SessionInSerializer,
    SessionQuerySerializer,
    StudySessionSerializer,
    SubjectSerializer,
)

base_logger = structlog.get_logger()


def request_logger(request):
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()), user_id=str(request.user.id))


class SubjectListView(views.APIView):
    def get(self, request):
        subjects = Subject.objects.filter(user_id=request.user.id).order_by("name")
        return Response(SubjectSerializer(subjects, many=True).data)

    def post(self, request):
        s = SubjectSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        subject = s.save(user_id=request.user.id)
        request_logger(request).info("subject_created", subject_id=str(subject.id))
        return Response(SubjectSerializer(subject).data, status=status.HTTP_201_CREATED)


class GoalListView(views.APIView):
    def get(self, request):
        goals = Goal.objects.filter(user_id=request.user.id, completed=False).order_by("end_date")
        return Response(GoalSerializer(goals, many=True).data)

    def post(self, request):
        s = GoalSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        subject_id = s.validated_data.get("subject_id")
        if subject_id and not Subject.objects.filter(id=subject_id, user_id=request.user.id).exists():
            raise NotFound("Subject not found.")
        goal = s.save(user_id=request.user.id)
        request_logger(request).info("goal_created", goal_id=str(goal.id))
        return Response(GoalSerializer(goal).data, status=status.HTTP_201_CREATED)


class SubjectDetailView(views.APIView):
    def delete(self, request, subject_id):
        subjects.delete_subject(request.user.id, subject_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class GoalDetailView(views.APIView):
    def delete(self, request, goal_id):
        subjects.delete_goal(request.user.id, goal_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class StudySessionView(views.APIView):
    def get(self, request):
        qs = SessionQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        sessions = list_sessions(request.user.id, **qs.validated_data)
        return Response(StudySessionSerializer(sessions, many=True).data)

    def post(self, request):
        logger = request_logger(request)

        s = SessionInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        session, first_review, profile = record_study_session(request.user.id, **s.validated_data)

        logger.info(
            "session_api_response",
            session_id=str(session.id),
            first_review_utc=first_review.review_date.isoformat(),
            first_review_local=to_local_iso(first_review.review_date),
            points=profile.points,
            streak=profile.current_streak,
        )

        return Response(
            {
                "session": StudySessionSerializer(session).data,
                "first_review": ReviewSerializer(first_review).data,
                "profile": ProfileSerializer(profile).data,
            },
            status=status.HTTP_201_CREATED,
        )


class SessionDetailView(views.APIView):
    def delete(self, request, session_id):
        delete_session(request.user.id, session_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PendingReviewsView(views.APIView):
    def get(self, request):
        logger = request_logger(request)

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data.get("until")

        reviews = list_pending_reviews(request.user.id, until)

        logger.info(
            "pending_reviews_api_response",
            until_utc=until.isoformat() if until else None,
            review_count=len(reviews),
        )

        return Response({"reviews": ReviewSerializer(reviews, many=True).data})


class CompleteReviewView(views.APIView):
    def post(self, request, review_id):
        logger = request_logger(request)

        s = ReviewCompleteSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        difficulty = s.validated_data["difficulty"]

        review, next_review, profile = complete_review(request.user.id, review_id, difficulty)

        logger.info(
            "review_api_response",
            review_id=str(review.id),
            difficulty=difficulty,
            next_interval=next_review.review_interval if next_review else None,
            next_review_utc=next_review.review_date.isoformat() if next_review else None,
        )

        return Response(
            {
                "review": ReviewSerializer(review).data,
                "next_review": ReviewSerializer(next_review).data if next_review else None,
                "profile": ProfileSerializer(profile).data,
            }
        )


class ReviewDetailView(views.APIView):
    def delete(self, request, review_id):
        delete_review(request.user.id, review_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ProfileView(views.APIView):
    def get(self, request):
        profile = gamification.get_profile(request.user.id)
        return Response(ProfileSerializer(profile).data)


class AvatarView(views.APIView):
    def put(self, request):
        s = AvatarSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        profile = profiles.update_avatar(request.user.id, s.validated_data["selected_avatar"])
        return Response(ProfileSerializer(profile).data)


class WeeklyRecordView(views.APIView):
    def post(self, request):
        profile = gamification.check_and_update_weekly_points_record(request.user.id)
        return Response(ProfileSerializer(profile).data)


class DashboardView(views.APIView):
    def get(self, request):
        return Response(dashboard.build_summary(request.user.id))


class StatisticsView(views.APIView):
    def get(self, request):
        return Response(statistics.build_statistics(request.user.id))


class FriendListView(views.APIView):
    def get(self, request):
        friends = social.list_friends(request.user.id)
        return Response({"friends": PublicProfileSerializer(friends, many=True).data})


class FriendDetailView(views.APIView):
    def delete(self, request, user_id):
        social.remove_friend(request.user.id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class FriendRequestListView(views.APIView):
    def get(self, request):
        pending = social.list_pending_requests(request.user.id)
        return Response(
            {
                "requests": [
                    {
                        "from_user_id": str(f.user_id_1),
                        "to_user_id": str(f.user_id_2),
                        "created_at": f.created_at.isoformat(),
                        "sender": PublicProfileSerializer(sender).data if sender else None,
                    }
                    for f, sender in pending
                ]
            }
        )

    def post(self, request):
        s = FriendRequestInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        friendship = social.send_friend_request(request.user.id, s.validated_data["user_id"])
        return Response(
            {"to_user_id": str(friendship.user_id_2), "status": friendship.status},
            status=status.HTTP_201_CREATED,
        )


class AcceptFriendRequestView(views.APIView):
    def post(self, request, user_id):
        friendship = social.accept_friend_request(request.user.id, user_id)
        return Response({"from_user_id": str(friendship.user_id_1), "status": friendship.status})


class DeclineFriendRequestView(views.APIView):
    def post(self, request, user_id):
        social.decline_friend_request(request.user.id, user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class UserSearchView(views.APIView):
    def get(self, request):
        qs = SearchQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        results = social.search_users(request.user.id, qs.validated_data["q"])
        return Response({"results": SearchResultSerializer(results, many=True).data})


class WeeklyRankingView(views.APIView):
    def get(self, request):
        ranking, me, position = social.weekly_ranking(request.user.id)
        return Response(
            {
                "ranking": [
                    {
                        "id": str(p.id),
                        "user_name": social.effective_display_name(p),
                        "selected_avatar": p.selected_avatar,
                        "weekly_points": p.weekly_points,
                    }
                    for p in ranking
                ],
                "current_user_position": position,
                "current_user_weekly_points": me.weekly_points,
            }
        )


class QuizView(views.APIView):
    def post(self, request):
        logger = request_logger(request)

        s = QuizInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        items = quiz.generate_quiz(request.user.id, **s.validated_data)
        logger.info("quiz_api_response", item_count=len(items))
        return Response({"items": items})


class UpdateDisplayNameView(views.APIView):
    """Answers `{profile}` or `{error}` like the hosted edge function it replaces."""

    permission_classes = [AllowAny]

    def post(self, request):
        if not request.user.is_authenticated:
            return Response({"error": "Not authenticated"}, status=status.HTTP_401_UNAUTHORIZED)

        name = request.data.get("displayName", request.data.get("new_display_name"))
        try:
            profile = profiles.update_display_name(request.user.id, name)
        except DisplayNameInvalid as exc:
            return Response({"error": str(exc.detail[0])}, status=status.HTTP_400_BAD_REQUEST)
        except DisplayNameTaken as exc:
            return Response({"error": str(exc.detail)}, status=status.HTTP_409_CONFLICT)

        return Response({"profile": ProfileSerializer(profile).data})
