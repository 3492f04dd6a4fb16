from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PricingRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                (
                    "rule_type",
                    models.CharField(
                        choices=[("multiplier", "Multiplier"), ("flat_fee", "Flat fee")],
                        max_length=20,
                    ),
                ),
                ("value", models.DecimalField(decimal_places=4, max_digits=10)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "conditions",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Optional keys: days_of_week (0=Sunday..6=Saturday), start_hour, end_hour.",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Pricing rule",
                "verbose_name_plural": "Pricing rules",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["is_active"], name="pricing_rule_active_idx")],
            },
        ),
    ]
