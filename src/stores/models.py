"""Models for the stores app."""
from django.core.exceptions import ValidationError
from django.db import models

from core.models import TimeStampedModel

# Label used for details whose employee is not assigned to any store.
UNASSIGNED_STORE_NAME = "미지정"


class Store(TimeStampedModel):
    """A service-center location; labor-share statistics are grouped by store."""

    name = models.CharField("점포명", max_length=120, unique=True)
    code = models.CharField("코드", max_length=30, blank=True, default="")
    is_active = models.BooleanField("사용", default=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "점포"
        verbose_name_plural = "점포"

    def __str__(self):
        return self.name

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "점포명을 입력해주세요."})
        if self.name == UNASSIGNED_STORE_NAME:
            raise ValidationError({"name": f"'{UNASSIGNED_STORE_NAME}'은(는) 사용할 수 없는 점포명입니다."})
