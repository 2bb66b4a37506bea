import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Artist",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(db_index=True, max_length=64)),
                ("name", models.CharField(max_length=255)),
                ("status", models.CharField(default="pending_review", max_length=20)),
                ("genres", models.JSONField(blank=True, default=list)),
                ("description", models.TextField(blank=True)),
                ("hourly_rate", models.DecimalField(decimal_places=2, max_digits=10)),
                ("minimum_hours", models.DecimalField(decimal_places=2, max_digits=6)),
                ("travel_fees", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("availability", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Booking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("artist_id", models.UUIDField(db_index=True)),
                ("event_id", models.UUIDField(db_index=True)),
                ("organizer_id", models.CharField(db_index=True, max_length=64)),
                ("status", models.CharField(default="requested", max_length=20)),
                ("status_history", models.JSONField(default=list)),
                ("start_time", models.DateTimeField(blank=True, null=True)),
                ("end_time", models.DateTimeField(blank=True, null=True)),
                ("payment", models.JSONField(blank=True, null=True)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["artist_id", "status"], name="gigs_booking_artist_status_idx")],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("organizer_id", models.CharField(db_index=True, max_length=64)),
                ("title", models.CharField(max_length=255)),
                ("venue", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("requirements", models.TextField(blank=True)),
                ("date", models.DateTimeField()),
                ("budget", models.DecimalField(decimal_places=2, max_digits=12)),
                ("status", models.CharField(default="draft", max_length=20)),
                ("artist_slots", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["-created_at"], name="gigs_event_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "role",
                    models.CharField(
                        choices=[("artist", "Artist"), ("organizer", "Organizer"), ("admin", "Admin")],
                        default="artist",
                        max_length=20,
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="gig_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
    ]
