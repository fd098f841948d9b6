import decimal

import django.core.validators
from django.db import migrations, models


def seed_id_tracker(apps, schema_editor):
    ProductIdTracker = apps.get_model("products", "ProductIdTracker")
    ProductIdTracker.objects.get_or_create(id=1, defaults={"last_id": 99999})


def remove_id_tracker(apps, schema_editor):
    ProductIdTracker = apps.get_model("products", "ProductIdTracker")
    ProductIdTracker.objects.filter(id=1).delete()


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "id",
                    models.IntegerField(
                        primary_key=True,
                        serialize=False,
                        validators=[
                            django.core.validators.MinValueValidator(100000),
                            django.core.validators.MaxValueValidator(999999),
                        ],
                    ),
                ),
                ("name", models.CharField(max_length=100)),
                ("quantity", models.IntegerField(default=0)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=18,
                        validators=[
                            django.core.validators.MinValueValidator(decimal.Decimal("1")),
                            django.core.validators.MaxValueValidator(
                                decimal.Decimal("9999999.99")
                            ),
                        ],
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        default=None,
                        null=True,
                        validators=[
                            django.core.validators.MinLengthValidator(5),
                            django.core.validators.MaxLengthValidator(500),
                        ],
                    ),
                ),
            ],
            options={
                "db_table": "products",
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("id__gte", 100000), ("id__lte", 999999)),
                        name="products_id_in_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("price__gte", decimal.Decimal("1"))),
                        name="products_price_min",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ProductIdTracker",
            fields=[
                ("id", models.IntegerField(default=1, primary_key=True, serialize=False)),
                ("last_id", models.IntegerField(default=99999)),
            ],
            options={
                "db_table": "product_id_trackers",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("id", 1)),
                        name="product_id_trackers_singleton",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("last_id__lte", 999999)),
                        name="product_id_trackers_last_id_max",
                    ),
                ],
            },
        ),
        migrations.RunPython(seed_id_tracker, remove_id_tracker),
    ]
