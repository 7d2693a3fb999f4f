from typing import Optional
from django.db.models import QuerySet
from it_assets.models import Notification

def list_recent(object_type: Optional[str] = None, limit: int = 200) -> QuerySet:
    qs = Notification.objects.all().order_by("-created_at")
    if object_type:
        qs = qs.filter(object_type=object_type)
    return qs[:limit]
