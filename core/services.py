"""Business orchestration for the token registry and player accounts.

This module coordinates: catalog → registry sync, ordered full reset, username
uniqueness, and wallet → account create-or-get.
Store connectivity failures are re-raised as TransientStoreError so callers can
tell "try again" apart from a constraint violation.
"""
import logging
import random
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field

from django.conf import settings
from django.db import DatabaseError, IntegrityError, InterfaceError, OperationalError, transaction

from .constants import ADDRESS_RE, DEFAULT_QUOTE, chain_label
from .exceptions import AccountNotFound, InvalidInput, TeardownError, TransientStoreError, UsernameTaken
from .models import (
	AffiliateEntry, Game, GameCoinFeed, GameParticipant, GameParticipantCoinFeed, GameResult, GameToken, UserAccount
)
from .price_feeds import TokenDescriptor, feeds_for_chain

logger = logging.getLogger(__name__)


@contextmanager
def store_call(what: str):
	"""
	Classify connectivity/timeout failures of the wrapped store access as retryable
	"""
	try:
		yield
	except (OperationalError, InterfaceError) as e:
		logger.warning("store unavailable during %s: %s", what, e)
		raise TransientStoreError(f"{what}: {e}") from e


# --- Token registry ----------------------------------------------------------

def _registry_fields(token: TokenDescriptor, chain_id: int) -> dict:
	return {
		"symbol": token.base,
		"name": token.base_name,
		"base": token.base,
		"base_name": token.base_name,
		"quote": token.quote or DEFAULT_QUOTE,
		"logo": token.logo,
		"tv": token.tv,
		"chain_id": chain_id,
		"is_active": True,
	}


def sync_tokens(chain_id: int, feeds: dict | None = None) -> int:
	"""
	Upsert every catalog entry of `chain_id` into GameToken, keyed by (chain_id, address).

	Re-running with an unchanged catalog changes nothing. There is no wrapping
	transaction: the first failing upsert aborts the run, and a re-run converges.
	Returns the number of catalog entries processed.
	"""
	chain_id = int(chain_id)
	tokens = feeds_for_chain(chain_id, feeds)
	if not tokens:
		logger.info("No tokens found for chain %s", chain_id)
		return 0

	created = 0
	for token in tokens:
		with store_call(f"upsert {token.base} ({token.address})"):
			_, was_created = GameToken.objects.update_or_create(
				chain_id=chain_id,
				address=token.address,
				defaults=_registry_fields(token, chain_id),
			)
		created += int(was_created)

	logger.info(
		"Synced %d tokens for chain %s (%s), %d new",
		len(tokens), chain_id, chain_label(chain_id), created,
	)
	return len(tokens)


# --- Teardown ----------------------------------------------------------------

@dataclass(frozen=True)
class TeardownStep:
	label: str
	model: type


# Children before parents; each model only references models further down.
TEARDOWN_STEPS = (
	TeardownStep("affiliate entries", AffiliateEntry),
	TeardownStep("game results", GameResult),
	TeardownStep("participant coin feeds", GameParticipantCoinFeed),
	TeardownStep("game participants", GameParticipant),
	TeardownStep("game coin feeds", GameCoinFeed),
	TeardownStep("games", Game),
	TeardownStep("game tokens", GameToken),
	TeardownStep("user accounts", UserAccount),
)


@dataclass
class TeardownReport:
	deleted: dict[str, int] = field(default_factory=dict)

	@property
	def total(self) -> int:
		return sum(self.deleted.values())


def reset_all(steps=TEARDOWN_STEPS, progress=None) -> TeardownReport:
	"""
	Delete every row of every step's model, strictly in order.

	Not atomic: when a step fails, earlier steps stay applied and TeardownError
	reports which ones completed. `progress` is called with each step before it runs.
	"""
	report = TeardownReport()
	completed: list[str] = []
	for step in steps:
		if progress is not None:
			progress(step)
		try:
			with store_call(f"delete {step.label}"):
				deleted, _ = step.model.objects.all().delete()
		except (DatabaseError, TransientStoreError) as e:
			logger.error("reset aborted at %s: %s", step.label, e)
			raise TeardownError(step.label, completed, e) from e
		report.deleted[step.label] = deleted
		completed.append(step.label)
		logger.info("deleted %d %s", deleted, step.label)
	return report


# --- Accounts ----------------------------------------------------------------

ADJECTIVES = (
	"swift", "brave", "clever", "bright", "calm", "bold", "cool", "daring", "eager", "fierce",
	"gentle", "happy", "jolly", "keen", "lively", "mighty", "noble", "proud", "quick", "radiant",
	"sharp", "tough", "vivid", "witty", "zealous", "active", "ancient", "brilliant", "crystal", "dynamic",
	"electric", "fantastic", "glorious", "heroic", "infinite", "jubilant", "legendary", "mystic", "optimistic",
)

NOUNS = (
	"tiger", "eagle", "wolf", "lion", "bear", "hawk", "fox", "panther", "jaguar", "leopard",
	"falcon", "raven", "phoenix", "dragon", "unicorn", "griffin", "sphinx", "kraken", "basilisk", "chimera",
	"warrior", "knight", "ranger", "wizard", "mage", "rogue", "paladin", "druid", "bard", "monk",
	"archer", "berserker", "assassin", "necromancer", "sorcerer", "cleric", "barbarian", "fighter", "thief", "priest",
	"star", "moon", "sun", "comet", "nebula", "galaxy", "planet", "asteroid", "meteor", "cosmos",
	"storm", "thunder", "lightning", "hurricane", "tornado", "blizzard", "tsunami", "volcano", "avalanche", "degen",
)

USERNAME_MAX_LENGTH = UserAccount._meta.get_field("username").max_length


def normalize_address(address) -> str:
	"""
	Canonical (lower-case) form of a 0x wallet address; raises InvalidInput otherwise
	"""
	if not isinstance(address, str) or not ADDRESS_RE.match(address.strip()):
		raise InvalidInput("a 0x-prefixed 20-byte hex address is required")
	return address.strip().lower()


def generate_username() -> str:
	return f"{random.choice(ADJECTIVES)}-{random.choice(NOUNS)}"


def _username_free(username: str) -> bool:
	return not UserAccount.objects.filter(username__iexact=username).exists()


def generate_unique_username(attempts: int | None = None) -> str:
	"""
	Try a few random handles, then a few with a numeric suffix, then a hex suffix.

	Every candidate except the last one is checked against the store. The caller
	still has to handle a concurrent create taking the same handle.
	"""
	attempts = attempts if attempts is not None else settings.USERNAME_GENERATION_ATTEMPTS
	for _ in range(attempts):
		username = generate_username()
		if _username_free(username):
			return username
	for _ in range(attempts):
		username = f"{generate_username()}-{random.randint(0, 9999)}"
		if _username_free(username):
			return username
	return f"{generate_username()}-{uuid.uuid4().hex[:8]}"


def is_username_taken(candidate, current_username=None) -> bool:
	"""
	Fast, advisory check used before a rename.

	Two concurrent renames can both see False here; the case-insensitive unique
	constraint on UserAccount.username rejects the loser at commit time.
	"""
	if not isinstance(candidate, str) or not candidate.strip():
		return False
	candidate = candidate.strip()
	if isinstance(current_username, str) and candidate.lower() == current_username.strip().lower():
		return False
	with store_call("username lookup"):
		return UserAccount.objects.filter(username__iexact=candidate).exists()


def get_account_by_address(address) -> UserAccount | None:
	normalized = normalize_address(address)
	with store_call("account lookup"):
		return UserAccount.objects.filter(address=normalized).first()


def get_account_by_username(username) -> UserAccount | None:
	"""
	Case-insensitive handle lookup; "Alice" finds the account named "alice"
	"""
	if not isinstance(username, str) or not username.strip():
		raise InvalidInput("Username is required")
	with store_call("account lookup"):
		return UserAccount.objects.filter(username__iexact=username.strip()).first()


CREATE_ACCOUNT_ATTEMPTS = 3


def create_or_get_account(address) -> tuple[UserAccount, bool]:
	"""
	Return the account for `address`, creating it (with a generated username) if absent.

	A create that fails on the username constraint is retried with a fresh handle.
	"""
	normalized = normalize_address(address)
	with store_call("account create-or-get"):
		account = UserAccount.objects.filter(address=normalized).first()
		if account is not None:
			return account, False

		for attempt in range(CREATE_ACCOUNT_ATTEMPTS):
			username = generate_unique_username()
			try:
				with transaction.atomic():
					account = UserAccount.objects.create(address=normalized, username=username)
				break
			except IntegrityError:
				# Another request created this address first; return its row
				account = UserAccount.objects.filter(address=normalized).first()
				if account is not None:
					return account, False
				# Otherwise a concurrent create took the same handle
				if attempt + 1 >= CREATE_ACCOUNT_ATTEMPTS:
					raise
				logger.info("generated username %s was taken, drawing another", username)

	logger.info("created account %s as %s", normalized, username)
	return account, True


def _clean_url(value):
	if not isinstance(value, str):
		raise InvalidInput("image URLs must be strings")
	return value.strip() or None


def update_account(address, *, username=None, profile_image_url=None, background_image_url=None) -> UserAccount:
	"""
	Apply a profile edit. A blank username is ignored; blank image URLs clear the field.

	Username conflicts raise UsernameTaken, whether caught by the pre-check or by
	the unique constraint when the row is written.
	"""
	normalized = normalize_address(address)
	with store_call("account lookup"):
		account = UserAccount.objects.filter(address=normalized).first()
	if account is None:
		raise AccountNotFound(normalized)

	update_fields = []
	if username is not None:
		if not isinstance(username, str):
			raise InvalidInput("username must be a string")
		username = username.strip()
		if len(username) > USERNAME_MAX_LENGTH:
			raise InvalidInput(f"username must be at most {USERNAME_MAX_LENGTH} characters")
		if username:
			if is_username_taken(username, account.username):
				logger.info("rename of %s rejected: %s already taken", normalized, username)
				raise UsernameTaken(username)
			account.username = username
			update_fields.append("username")
	if profile_image_url is not None:
		account.profile_image_url = _clean_url(profile_image_url)
		update_fields.append("profile_image_url")
	if background_image_url is not None:
		account.background_image_url = _clean_url(background_image_url)
		update_fields.append("background_image_url")

	if not update_fields:
		return account

	try:
		with store_call("account update"), transaction.atomic():
			account.save(update_fields=update_fields + ["updated_at"])
	except IntegrityError as e:
		if "username" not in update_fields:
			raise
		# Lost the race: someone committed the same handle after our pre-check
		logger.info("rename of %s rejected at commit: %s", normalized, username)
		raise UsernameTaken(username) from e
	return account
