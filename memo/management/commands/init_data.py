import json
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from memo.models import User
from tracker.models import (
    Friendship,
    Goal,
    QuizQuota,
    Review,
    StudySession,
    Subject,
    UserProfile,
)


class Command(BaseCommand):
    help = "Replace all users and study data with the demo data set"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="MOCK_DATA.json", help="JSON file name to load data from"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        # data files live beside this command, never elsewhere on disk
        file_name = os.path.basename(options.get("file") or "MOCK_DATA.json")
        json_file_path = os.path.join(os.path.dirname(__file__), file_name)
        if not file_name.endswith(".json") or not os.path.isfile(json_file_path):
            raise CommandError(f"Data file not found: {file_name}")

        with open(json_file_path) as json_file:
            data = json.load(json_file)

        for model in (Review, StudySession, Goal, Subject, Friendship, QuizQuota, UserProfile):
            model.objects.all().delete()
        User.objects.all().delete()

        self.stdout.write(self.style.SUCCESS("All existing data has been deleted"))

        User.objects.create_superuser(
            "testuser", email="testuser@example.com", password="testpassword"
        )
        for entry in data.get("users", []):
            user = User.objects.create_user(
                entry["username"],
                email=f"{entry['username']}@example.com",
                password="testpassword",
            )
            UserProfile.objects.create(
                id=user.id,
                display_name=entry.get("display_name"),
                weekly_points=entry.get("weekly_points", 0),
                points=entry.get("points", 0),
            )
            for subject in entry.get("subjects", []):
                Subject.objects.create(
                    user_id=user.id,
                    name=subject["name"],
                    category=subject.get("category", ""),
                    color=subject.get("color", "#000000"),
                )

        self.stdout.write(
            self.style.SUCCESS(f"Mock data loaded successfully from {file_name}")
        )
