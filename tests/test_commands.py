from __future__ import annotations

from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from core.exceptions import TeardownError, TransientStoreError
from core.models import GameToken, UserAccount
from core.price_feeds import POLYGON_PRICE_FEEDS

pytestmark = pytest.mark.django_db


def test_sync_tokens_reports_progress() -> None:
	out = StringIO()

	call_command("sync_tokens", "--chain", "137", stdout=out)

	assert GameToken.objects.filter(chain_id=137).count() == len(POLYGON_PRICE_FEEDS)
	assert "Seeding tokens for chain 137 (Polygon)" in out.getvalue()
	assert f"Seeded {len(POLYGON_PRICE_FEEDS)} tokens for chain 137" in out.getvalue()


def test_sync_tokens_defaults_to_configured_chain(settings) -> None:
	settings.DEFAULT_CHAIN_ID = 8453

	call_command("sync_tokens", stdout=StringIO())

	assert set(GameToken.objects.values_list("chain_id", flat=True)) == {8453}


def test_sync_tokens_for_chain_without_catalog() -> None:
	out = StringIO()

	call_command("sync_tokens", "--chain", "999999", stdout=out)

	assert "No tokens found for chain 999999" in out.getvalue()
	assert GameToken.objects.count() == 0


def test_sync_tokens_retries_transient_failures() -> None:
	err = StringIO()
	with patch(
		"core.management.commands.sync_tokens.sync_tokens",
		side_effect=[TransientStoreError("timeout"), 3],
	) as sync:
		call_command("sync_tokens", "--chain", "137", "--retries", "1", stdout=StringIO(), stderr=err)

	assert sync.call_count == 2
	assert "retrying (1/1)" in err.getvalue()


def test_sync_tokens_fails_loudly_without_retries() -> None:
	with patch(
		"core.management.commands.sync_tokens.sync_tokens",
		side_effect=TransientStoreError("timeout"),
	):
		with pytest.raises(CommandError, match="Error seeding tokens"):
			call_command("sync_tokens", "--chain", "137", stdout=StringIO(), stderr=StringIO())


def test_reset_requires_confirmation(game_graph) -> None:
	with pytest.raises(CommandError, match="--yes"):
		call_command("reset_database", stdout=StringIO())

	assert UserAccount.objects.count() == 2


def test_reset_database_empties_store(game_graph) -> None:
	out = StringIO()

	call_command("reset_database", "--yes", stdout=out)

	lines = out.getvalue().splitlines()
	assert lines[1] == "  - Deleting affiliate entries..."
	assert lines[-2] == "  - Deleting user accounts..."
	assert "Database reset successfully" in lines[-1]
	assert UserAccount.objects.count() == 0
	assert GameToken.objects.count() == 0


def test_reset_database_failure_is_a_command_error(db) -> None:
	failure = TeardownError("games", ["affiliate entries"], RuntimeError("locked"))

	with patch("core.management.commands.reset_database.reset_all", side_effect=failure):
		with pytest.raises(CommandError, match=r"not rolled back\): affiliate entries"):
			call_command("reset_database", "--yes", stdout=StringIO())


def test_explicit_chain_zero_is_not_replaced_by_default(settings) -> None:
	settings.DEFAULT_CHAIN_ID = 137
	out = StringIO()

	call_command("sync_tokens", "--chain", "0", stdout=out)

	assert "No tokens found for chain 0" in out.getvalue()
	assert GameToken.objects.count() == 0
