from __future__ import annotations

import pytest

from core.models import (
	AffiliateEntry,
	Game,
	GameCoinFeed,
	GameParticipant,
	GameParticipantCoinFeed,
	GameResult,
	GameToken,
	UserAccount,
)
from core.price_feeds import TokenDescriptor

ALICE_WALLET = "0x" + "a1" * 20
BOB_WALLET = "0x" + "b2" * 20


@pytest.fixture
def catalog() -> dict[int, tuple[TokenDescriptor, ...]]:
	return {
		137: (
			TokenDescriptor(address="0xAAA", base="ETH", base_name="Ethereum", chain_id=137, tv="BINANCE:ETHUSDT"),
			TokenDescriptor(
				address="0xBBB",
				base="BTC",
				base_name="Bitcoin",
				chain_id=137,
				quote="USD",
				logo="https://example.com/btc.png",
				tv="BINANCE:BTCUSDT",
			),
		),
		8453: (
			TokenDescriptor(address="0xAAA", base="ETH", base_name="Ethereum", chain_id=8453, tv="COINBASE:ETHUSD"),
		),
		56: (),
	}


@pytest.fixture
def game_graph(db) -> dict[str, object]:
	"""One row in every table, wired together through PROTECT foreign keys."""
	alice = UserAccount.objects.create(address=ALICE_WALLET, username="alice")
	bob = UserAccount.objects.create(address=BOB_WALLET, username="bob")
	eth = GameToken.objects.create(
		chain_id=137, address="0xAAA", symbol="ETH", name="Ethereum", base="ETH", base_name="Ethereum"
	)
	game = Game.objects.create(chain_id=137, onchain_id="1", creator=alice)
	GameCoinFeed.objects.create(game=game, token=eth)
	participant = GameParticipant.objects.create(game=game, user=bob)
	GameParticipantCoinFeed.objects.create(participant=participant, token=eth, is_captain=True)
	GameResult.objects.create(game=game, participant=participant, position=1)
	AffiliateEntry.objects.create(game=game, user=bob, affiliate=alice)
	return {"alice": alice, "bob": bob, "eth": eth, "game": game, "participant": participant}
