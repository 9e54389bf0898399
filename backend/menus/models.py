from django.conf import settings
from django.db import models
from django.utils import timezone

from sppg.ids import new_id


class MenuPlan(models.Model):
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    date = models.DateTimeField(default=timezone.now, db_index=True)
    name = models.CharField(max_length=255)
    portions = models.PositiveIntegerField(default=0)
    ingredients = models.JSONField(default=list, blank=True)  # [{name, quantity, unit}]
    created_at = models.DateTimeField(default=timezone.now)
    performed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ["-date"]

    def __str__(self):
        return f"{self.name} ({self.portions} porsi)"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "name": self.name,
            "portions": self.portions,
            "ingredients": list(self.ingredients or []),
            "created_at": self.created_at.isoformat(),
            "performed_by": self.performed_by.username if self.performed_by_id else None,
        }
