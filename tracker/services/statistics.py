"""Per-subject performance and the study time spread over weekdays."""
from django.db.models import F
from django.utils import timezone

from ..data.models import StudySession, Subject

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def accuracy(correct: int, attempted: int) -> float:
    if attempted <= 0:
        return 0.0
    return min(1.0, max(0.0, correct / attempted))


def build_statistics(user_id):
    # sessions with no time or a reversed range are left out
    sessions = list(
        StudySession.objects
        .filter(user_id=user_id, duration_minutes__gt=0, start_time__lte=F("end_time"))
        .only("subject_id", "start_time", "duration_minutes",
              "questions_attempted", "questions_correct")
    )

    per_subject = {}
    weekday_minutes = [0] * len(WEEKDAYS)
    for s in sessions:
        totals = per_subject.setdefault(s.subject_id, [0, 0, 0])
        totals[0] += s.duration_minutes
        totals[1] += s.questions_attempted or 0
        totals[2] += s.questions_correct or 0

        # Monday is 0 for weekday(), the list starts on Sunday
        weekday_minutes[(timezone.localtime(s.start_time).weekday() + 1) % 7] += s.duration_minutes

    performances = []
    for subject in Subject.objects.filter(user_id=user_id, id__in=list(per_subject)):
        minutes, attempted, correct = per_subject[subject.id]
        performances.append({
            "id": str(subject.id),
            "name": subject.name,
            "color": subject.color,
            "total_minutes": minutes,
            "accuracy": accuracy(correct, attempted),
        })
    performances.sort(key=lambda p: (-p["total_minutes"], p["name"]))

    return {
        "subject_performance": performances,
        "weekly_distribution": [
            {"day": day, "minutes": minutes} for day, minutes in zip(WEEKDAYS, weekday_minutes)
        ],
    }
