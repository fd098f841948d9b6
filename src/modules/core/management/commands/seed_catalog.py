from __future__ import annotations

import random
from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError

from modules.core.exceptions import DomainError
from modules.products.constants import ID_TRACKER_PK, ID_TRACKER_SEED
from modules.products.dtos import CreateProductDTO
from modules.products.models import Product, ProductIdTracker
from modules.products.services import build_product_service

SAMPLE_CATALOG = [
    ("Monitor 27\"", "IPS panel, 144 Hz", Decimal("1299.90")),
    ("Mechanical Keyboard", "Brown switches, ANSI layout", Decimal("399.90")),
    ("Gaming Mouse", "16000 DPI optical sensor", Decimal("249.90")),
    ("Notebook 14\"", "16 GB RAM, 512 GB SSD", Decimal("3999.00")),
    ("Headset", "Closed-back, USB-C", Decimal("299.90")),
    ("Office Desk", "140 x 70 cm, oak finish", Decimal("899.00")),
    ("Ergonomic Chair", "Adjustable lumbar support", Decimal("1499.00")),
    ("A4 Paper", "500 sheets, 75 g/m2", Decimal("29.90")),
    ("Desk Lamp", "LED, dimmable", Decimal("59.90")),
    ("Laptop Stand", "Aluminium, foldable", Decimal("149.90")),
]


class Command(BaseCommand):
    help = "Provision the product id tracker and optionally create sample products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset-tracker",
            action="store_true",
            help=f"Reset last_id to {ID_TRACKER_SEED}. Refused while any product exists.",
        )
        parser.add_argument(
            "--products",
            type=int,
            default=0,
            help="Number of sample products to create through the product service.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self._provision_tracker(reset=options["reset_tracker"])

        count = options["products"]
        if count < 0:
            raise CommandError("--products must be zero or positive.")
        created = self._seed_products(count) if count else []

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={len(created)}"
                + (f", ids={created[0]}..{created[-1]}" if created else "")
            )
        )

    def _provision_tracker(self, reset: bool) -> None:
        tracker, created = ProductIdTracker.objects.get_or_create(
            id=ID_TRACKER_PK, defaults={"last_id": ID_TRACKER_SEED}
        )
        if created:
            self.stdout.write(f"Id tracker created at {tracker.last_id}.")
        elif reset:
            if Product.objects.exists():
                raise CommandError(
                    "--reset-tracker refused: products exist and would collide "
                    "with re-issued ids."
                )
            tracker.last_id = ID_TRACKER_SEED
            tracker.save(update_fields=["last_id"])
            self.stdout.write(f"Id tracker reset to {tracker.last_id}.")
        else:
            self.stdout.write(f"Id tracker already provisioned at {tracker.last_id}.")

    def _seed_products(self, count: int) -> list[int]:
        self.stdout.write("Creating products...")
        service = build_product_service()
        created: list[int] = []
        for index in range(count):
            name, description, price = SAMPLE_CATALOG[index % len(SAMPLE_CATALOG)]
            dto = CreateProductDTO(
                name=name,
                description=description,
                price=price,
                quantity=random.randint(10, 200),
            )
            try:
                product = service.create_product(dto)
            except DomainError as exc:
                raise CommandError(f"Product seeding stopped: {exc}") from exc
            created.append(product.id)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return created
