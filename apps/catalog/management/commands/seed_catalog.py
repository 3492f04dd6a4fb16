"""Load a demo catalog and rule set; safe to run repeatedly."""

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Coach, Court, Equipment
from apps.pricing.models import PricingRule

COURTS = [
    ("Court 1", "indoor", Decimal("40.00")),
    ("Court 2", "indoor", Decimal("40.00")),
    ("Court 3", "outdoor", Decimal("30.00")),
    ("Court 4", "outdoor", Decimal("30.00")),
]

COACHES = [
    ("Anna", "Junior and beginner groups", Decimal("25.00")),
    ("Marat", "Competition training", Decimal("35.00")),
    ("Lena", "Fitness and footwork", Decimal("30.00")),
]

EQUIPMENT = [
    ("Racket", 10, Decimal("5.00")),
    ("Shoes", 8, Decimal("3.00")),
]

RULES = [
    ("Peak hours", PricingRule.RuleType.MULTIPLIER, Decimal("1.5"), {"start_hour": 18, "end_hour": 21}),
    ("Weekend", PricingRule.RuleType.MULTIPLIER, Decimal("1.2"), {"days_of_week": [0, 6]}),
    ("Indoor lighting", PricingRule.RuleType.FLAT_FEE, Decimal("2.00"), {"start_hour": 20, "end_hour": 23}),
]


class Command(BaseCommand):
    help = "Creates demo courts, coaches, equipment and pricing rules that do not exist yet"

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0

        for name, court_type, price in COURTS:
            _, is_new = Court.objects.get_or_create(
                name=name,
                defaults={"court_type": court_type, "base_price_per_hour": price},
            )
            created += is_new

        for name, bio, rate in COACHES:
            _, is_new = Coach.objects.get_or_create(name=name, defaults={"bio": bio, "hourly_rate": rate})
            created += is_new

        for name, total_quantity, price in EQUIPMENT:
            _, is_new = Equipment.objects.get_or_create(
                name=name,
                defaults={"total_quantity": total_quantity, "price_per_use": price},
            )
            created += is_new

        for name, rule_type, value, conditions in RULES:
            _, is_new = PricingRule.objects.get_or_create(
                name=name,
                defaults={"rule_type": rule_type, "value": value, "conditions": conditions},
            )
            created += is_new

        if created:
            self.stdout.write(self.style.SUCCESS(f"Seeded {created} catalog entries"))
        else:
            self.stdout.write("Catalog already seeded, nothing to do")
