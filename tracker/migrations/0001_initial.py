import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Subject",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("name", models.CharField(max_length=100)),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("color", models.CharField(default="#000000", max_length=9)),
            ],
            options={
                "db_table": "subjects",
                "indexes": [models.Index(fields=["user_id", "name"], name="subjects_user_id_6f2b1c_idx")],
            },
        ),
        migrations.CreateModel(
            name="StudySession",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("subject_id", models.UUIDField()),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                ("duration_minutes", models.PositiveIntegerField()),
                ("questions_attempted", models.PositiveIntegerField(blank=True, null=True)),
                ("questions_correct", models.PositiveIntegerField(blank=True, null=True)),
                ("notes", models.TextField(blank=True, null=True)),
            ],
            options={
                "db_table": "study_sessions",
                "indexes": [
                    models.Index(fields=["user_id", "start_time"], name="study_sessi_user_id_3a9c4e_idx"),
                    models.Index(fields=["user_id", "subject_id"], name="study_sessi_user_id_b71d02_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Review",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("session_id", models.UUIDField()),
                ("subject_id", models.UUIDField()),
                ("review_date", models.DateTimeField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("completed", "Completed")], default="pending", max_length=16)),
                ("review_interval", models.CharField(default="1d", max_length=8)),
                ("last_review_difficulty", models.CharField(blank=True, choices=[("easy", "Easy"), ("medium", "Medium"), ("hard", "Hard")], max_length=8, null=True)),
            ],
            options={
                "db_table": "reviews",
                "indexes": [models.Index(fields=["user_id", "status", "review_date"], name="reviews_user_id_5e8f1a_idx")],
            },
        ),
        migrations.CreateModel(
            name="Goal",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.UUIDField()),
                ("subject_id", models.UUIDField(blank=True, null=True)),
                ("title", models.CharField(max_length=200)),
                ("target_hours", models.FloatField()),
                ("end_date", models.DateTimeField()),
                ("completed", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "goals",
                "indexes": [models.Index(fields=["user_id", "completed"], name="goals_user_id_0c4d9b_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.UUIDField(primary_key=True, serialize=False)),
                ("points", models.PositiveIntegerField(default=0)),
                ("weekly_points", models.PositiveIntegerField(default=0)),
                ("current_streak", models.PositiveIntegerField(default=0)),
                ("max_streak", models.PositiveIntegerField(default=0)),
                ("max_weekly_points", models.PositiveIntegerField(default=0)),
                ("last_study_date", models.DateTimeField(blank=True, null=True)),
                ("selected_avatar", models.CharField(default="zoe_default", max_length=64)),
                ("display_name", models.CharField(blank=True, max_length=32, null=True, unique=True)),
            ],
            options={
                "db_table": "user_profiles",
                "indexes": [models.Index(fields=["weekly_points"], name="user_profil_weekly__8d2e6f_idx")],
            },
        ),
        migrations.CreateModel(
            name="Friendship",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id_1", models.UUIDField()),
                ("user_id_2", models.UUIDField()),
                ("status", models.CharField(choices=[("pending", "Pending"), ("accepted", "Accepted"), ("declined", "Declined"), ("blocked", "Blocked")], default="pending", max_length=16)),
                ("action_user_id", models.UUIDField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "db_table": "friendships",
                "indexes": [models.Index(fields=["user_id_2", "status"], name="friendships_user_id_a4b7c3_idx")],
                "unique_together": {("user_id_1", "user_id_2")},
            },
        ),
        migrations.CreateModel(
            name="QuizQuota",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField()),
                ("day", models.DateField()),
                ("count", models.PositiveIntegerField(default=0)),
            ],
            options={
                "db_table": "quiz_quotas",
                "unique_together": {("user_id", "day")},
            },
        ),
    ]
