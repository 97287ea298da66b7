"""Session-side adapter that makes sure a connected wallet has an account.

One AccountMaterializer lives for one wallet-connection session. It remembers
which addresses it already materialized so repeated connect events for the same
wallet don't hit the store again. The transport defaults to calling the
create-or-get service in-process; an HTTP client can be passed instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import models

from core.exceptions import InvalidInput, TransientStoreError
from core.services import create_or_get_account, normalize_address

logger = logging.getLogger(__name__)


class MaterializeStatus(models.TextChoices):
	CREATED = "CREATED", "Created"
	EXISTING = "EXISTING", "Already existed"
	INVALID = "INVALID", "Invalid address"
	FAILED_RETRYABLE = "FAILED_RETRYABLE", "Failed (Retryable)"
	FAILED_FINAL = "FAILED_FINAL", "Failed (Final)"


@dataclass(frozen=True)
class MaterializeResult:
	status: str
	address: str | None = None
	account_id: str | None = None
	error: str = ""

	@property
	def ok(self) -> bool:
		return self.status in (MaterializeStatus.CREATED, MaterializeStatus.EXISTING)

	@property
	def retryable(self) -> bool:
		return self.status == MaterializeStatus.FAILED_RETRYABLE


def _local_transport(address: str):
	account, created = create_or_get_account(address)
	return str(account.id), created


class AccountMaterializer:
	"""
	ensure_account(address) → MaterializeResult; failures are returned, not raised.

	transport(address) must return (account_id, created) and raise
	TransientStoreError for failures worth retrying.
	"""

	def __init__(self, transport=None):
		self._transport = transport or _local_transport
		self._materialized: dict[str, str] = {}

	def __contains__(self, address) -> bool:
		try:
			return normalize_address(address) in self._materialized
		except InvalidInput:
			return False

	def ensure_account(self, address) -> MaterializeResult:
		try:
			normalized = normalize_address(address)
		except InvalidInput as e:
			return MaterializeResult(status=MaterializeStatus.INVALID, error=str(e))

		if normalized in self._materialized:
			return MaterializeResult(
				status=MaterializeStatus.EXISTING,
				address=normalized,
				account_id=self._materialized[normalized],
			)

		try:
			account_id, created = self._transport(normalized)
		except TransientStoreError as e:
			logger.warning("account for %s not materialized, will retry: %s", normalized, e)
			return MaterializeResult(status=MaterializeStatus.FAILED_RETRYABLE, address=normalized, error=str(e))
		except Exception as e:
			logger.exception("account for %s could not be materialized", normalized)
			return MaterializeResult(status=MaterializeStatus.FAILED_FINAL, address=normalized, error=str(e))

		self._materialized[normalized] = account_id
		return MaterializeResult(
			status=MaterializeStatus.CREATED if created else MaterializeStatus.EXISTING,
			address=normalized,
			account_id=account_id,
		)

	def forget(self, address) -> None:
		"""
		Drop one address from the session (e.g. the wallet disconnected)
		"""
		try:
			self._materialized.pop(normalize_address(address), None)
		except InvalidInput:
			pass

	def reset(self) -> None:
		self._materialized.clear()
