from django.db import models


class Notification(models.Model):
    class Channel(models.IntegerChoices):
        EMAIL = 1, "Email"

    object_type = models.CharField(max_length=64, blank=True, default="", help_text="vd: employee")
    object_id   = models.CharField(max_length=64, blank=True, default="", help_text="ID đối tượng liên quan (string)")

    to_user    = models.IntegerField(null=True, blank=True, db_index=True)
    to_email   = models.TextField(blank=True, default="", help_text="Danh sách email, ngăn cách bởi dấu phẩy")
    recipients = models.JSONField(null=True, blank=True, help_text="List[int] user_id")

    channel = models.IntegerField(choices=Channel.choices, default=Channel.EMAIL, db_index=True)
    title   = models.CharField(max_length=200)
    payload = models.JSONField(null=True, blank=True)

    delivered     = models.BooleanField(default=False, db_index=True)
    delivered_at  = models.DateTimeField(null=True, blank=True)
    attempt_count = models.IntegerField(default=0)
    last_error    = models.TextField(blank=True, default="")

    provider_status_code = models.CharField(max_length=32, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "Notification"
        ordering = ["-created_at"]

    def __str__(self):
        state = "sent" if self.delivered else "failed"
        return f"NOTI[{self.get_channel_display()}] {self.object_type}#{self.object_id or '-'} ({state})"
