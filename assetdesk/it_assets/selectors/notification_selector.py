from typing import Optional
from django.db.models import QuerySet
from it_assets.repositories import notification_repository as repo

def recent_notifications(object_type: Optional[str] = None, limit: int = 200) -> QuerySet:
    return repo.list_recent(object_type=object_type, limit=limit)
