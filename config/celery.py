import os

from celery import Celery
from celery.schedules import crontab  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

app = Celery("quickcourt")

app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()


# ============================================================================
# CELERY BEAT SCHEDULE (Periodic Tasks)
# ============================================================================

app.conf.beat_schedule = {
    # Clear one-time codes that can no longer be used, hourly
    "purge-expired-otps": {
        "task": "users.purge_expired_otps",
        "schedule": crontab(minute=0),
    },
}

app.conf.timezone = "Asia/Kolkata"
