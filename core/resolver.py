"""Symbol → token metadata lookups against the price-feed catalog.

These are pure functions: no store access, no side effects. A miss (unknown
chain, unknown symbol, bad input) is a normal outcome and returns None.
"""

from __future__ import annotations

from .constants import SYMBOL_RE
from .price_feeds import TokenDescriptor, feeds_for_chain


def coerce_chain_id(chain_id) -> int | None:
	if not chain_id or isinstance(chain_id, bool):
		return None
	try:
		return int(chain_id)
	except (TypeError, ValueError):
		return None


def resolve_token(symbol, chain_id, feeds: dict | None = None) -> TokenDescriptor | None:
	"""
	First catalog entry on `chain_id` whose base symbol matches, case-insensitively
	"""
	chain = coerce_chain_id(chain_id)
	if chain is None or not isinstance(symbol, str):
		return None
	wanted = symbol.strip().upper()
	for descriptor in feeds_for_chain(chain, feeds):
		if descriptor.base and descriptor.base.upper() == wanted:
			return descriptor
	return None


def resolve_ticker(symbol, chain_id, feeds: dict | None = None) -> str | None:
	"""
	Charting (TradingView) ticker for a symbol, e.g. "eth" on 137 → "BINANCE:ETHUSDT"
	"""
	descriptor = resolve_token(symbol, chain_id, feeds)
	return descriptor.tv if descriptor else None


def resolve_address(symbol, chain_id, feeds: dict | None = None) -> str | None:
	descriptor = resolve_token(symbol, chain_id, feeds)
	return descriptor.address if descriptor else None


def is_plausible_symbol(text) -> bool:
	"""
	True when `text` looks like a ticker query rather than free text
	"""
	if not isinstance(text, str):
		return False
	return bool(SYMBOL_RE.match(text.strip().upper()))
