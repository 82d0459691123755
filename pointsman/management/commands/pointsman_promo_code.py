"""Management command to show or rotate a store's promotional code."""

from django.core.management.base import BaseCommand, CommandError

from pointsman.exceptions import PointsmanError
from pointsman.models import Store
from pointsman.services import promo_codes


class Command(BaseCommand):
    help = "Print a store's active promotional code (optionally rotating it first)"

    def add_arguments(self, parser):
        parser.add_argument("store_id", type=int, help="Store id")
        parser.add_argument(
            "--rotate",
            action="store_true",
            help="Replace the current code before printing it",
        )

    def handle(self, *args, **options):
        store_id = options["store_id"]
        if not Store.objects.filter(pk=store_id).exists():
            raise CommandError(f"Store {store_id} does not exist.")

        try:
            if options["rotate"]:
                code = promo_codes.rotate(store_id)
            else:
                code = promo_codes.current_code(store_id)
        except PointsmanError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(f"Store {store_id} promotional code: {code}"))
