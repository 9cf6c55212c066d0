from datetime import timedelta

from django.db.models import Sum
from django.utils import timezone

from ..config import RECENT_WINDOW_DAYS
from ..data.models import Goal, StudySession, Subject
from ..data.repos import ensure_profile
from .gamification import display_streak


def goal_progress(completed_minutes: int, target_hours: float) -> float:
    target_minutes = int(target_hours * 60)
    if target_minutes <= 0:
        return 0.0
    return min(1.0, completed_minutes / target_minutes)


def build_summary(user_id, now=None):
    now = now or timezone.now()
    profile = ensure_profile(user_id)
    sessions = StudySession.objects.filter(user_id=user_id)

    total = sessions.aggregate(total=Sum("duration_minutes"))["total"] or 0
    recent = (sessions
              .filter(start_time__gte=now - timedelta(days=RECENT_WINDOW_DAYS))
              .aggregate(total=Sum("duration_minutes"))["total"] or 0)

    per_subject = dict(
        sessions.values("subject_id")
        .annotate(total=Sum("duration_minutes"))
        .values_list("subject_id", "total")
    )
    names = dict(Subject.objects.filter(user_id=user_id).values_list("id", "name"))

    goals = []
    for goal in Goal.objects.filter(user_id=user_id, completed=False).order_by("end_date"):
        if goal.subject_id:
            done = per_subject.get(goal.subject_id, 0)
        else:
            done = total
        goals.append({
            "id": str(goal.id),
            "title": goal.title,
            "completed_minutes": done,
            "target_minutes": int(goal.target_hours * 60),
            "progress": goal_progress(done, goal.target_hours),
            "deadline": goal.end_date.isoformat(),
            "subject_name": names.get(goal.subject_id),
        })

    return {
        "total_minutes": total,
        "recent_minutes": recent,
        "points": profile.points,
        "streak": display_streak(profile, now),
        "goals": goals,
    }
