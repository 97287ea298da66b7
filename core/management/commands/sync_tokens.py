"""Copy one chain's price-feed catalog into the token registry."""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from core.constants import chain_label
from core.exceptions import TransientStoreError
from core.services import sync_tokens


class Command(BaseCommand):
	help = "Upsert the price-feed catalog of a chain into GameToken (safe to re-run)"

	def add_arguments(self, parser):
		parser.add_argument("--chain", type=int, default=None, help="chain id (default: DEFAULT_CHAIN_ID)")
		parser.add_argument(
			"--retries", type=int, default=0,
			help="re-run the whole sync this many times after a transient store failure",
		)

	def handle(self, *args, **options):
		chain_id = settings.DEFAULT_CHAIN_ID if options["chain"] is None else options["chain"]
		retries = max(options["retries"], 0)
		self.stdout.write(f"Seeding tokens for chain {chain_id} ({chain_label(chain_id)})...")

		for attempt in range(retries + 1):
			try:
				processed = sync_tokens(chain_id)
				break
			except TransientStoreError as e:
				if attempt >= retries:
					raise CommandError(f"Error seeding tokens: {e}") from e
				self.stderr.write(f"  - store unavailable ({e}), retrying ({attempt + 1}/{retries})...")
			except DatabaseError as e:
				raise CommandError(f"Error seeding tokens: {e}") from e

		if processed == 0:
			self.stdout.write(f"No tokens found for chain {chain_id}")
			return
		self.stdout.write(self.style.SUCCESS(f"Seeded {processed} tokens for chain {chain_id} ({chain_label(chain_id)})"))
