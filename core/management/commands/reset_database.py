"""Delete all game data, children first. Destructive; operator use only."""

from django.core.management.base import BaseCommand, CommandError

from core.exceptions import TeardownError
from core.services import reset_all


class Command(BaseCommand):
	help = "Empty every game table in foreign-key order (affiliates → ... → user accounts)"

	def add_arguments(self, parser):
		parser.add_argument("--yes", action="store_true", help="confirm that all data should be deleted")

	def handle(self, *args, **options):
		if not options["yes"]:
			raise CommandError("Refusing to reset without --yes: this deletes every game, token and account.")

		self.stdout.write("Resetting database...")
		try:
			report = reset_all(progress=lambda step: self.stdout.write(f"  - Deleting {step.label}..."))
		except TeardownError as e:
			done = ", ".join(e.completed) or "none"
			raise CommandError(
				f"Error resetting database at '{e.step}': {e.cause}. "
				f"Already deleted (not rolled back): {done}. Inspect the database before retrying."
			) from e

		self.stdout.write(self.style.SUCCESS(
			f"Database reset successfully. {report.total} rows deleted; all tables are empty."
		))
