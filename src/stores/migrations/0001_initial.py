import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Store",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="생성일시")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="수정일시")),
                ("name", models.CharField(max_length=120, unique=True, verbose_name="점포명")),
                ("code", models.CharField(blank=True, default="", max_length=30, verbose_name="코드")),
                ("is_active", models.BooleanField(default=True, verbose_name="사용")),
            ],
            options={
                "verbose_name": "점포",
                "verbose_name_plural": "점포",
                "ordering": ["name"],
            },
        ),
    ]
