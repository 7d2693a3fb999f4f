import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "assetdesk.settings")

app = Celery("assetdesk")

# đọc các biến CELERY_* trong settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# tự tìm tasks.py trong các app đã cài
app.autodiscover_tasks()
