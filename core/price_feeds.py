"""Curated per-chain price-feed catalog.

Each entry is a Chainlink aggregator the game can use as a pickable coin. The
catalog is the source of truth for the token registry: `sync_tokens` copies it
into GameToken rows, and the resolver answers symbol lookups from it directly.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import ChainId


@dataclass(frozen=True)
class TokenDescriptor:
	address: str
	base: str
	base_name: str
	chain_id: int
	quote: str | None = None
	logo: str | None = None
	tv: str | None = None


def _feeds(chain_id: int, *rows: tuple) -> tuple[TokenDescriptor, ...]:
	return tuple(
		TokenDescriptor(address=address, base=base, base_name=base_name, chain_id=chain_id, quote="USD", tv=tv)
		for address, base, base_name, tv in rows
	)


POLYGON_PRICE_FEEDS = _feeds(
	ChainId.POLYGON,
	("0xc907E116054Ad103354f2D350FD2514433D57F6f", "BTC", "Bitcoin", "BINANCE:BTCUSDT"),
	("0xF9680D99D6C9589e2a93a78A04A279e509205945", "ETH", "Ethereum", "BINANCE:ETHUSDT"),
	("0xAB594600376Ec9fD91F8e885dADF0CE036862dE0", "MATIC", "Polygon", "BINANCE:MATICUSDT"),
	("0xd9FFdb71EbE7496cC440152d43986Aae0AB76665", "LINK", "Chainlink", "BINANCE:LINKUSDT"),
	("0x72484B12719E23115761D5DA1646945632979bB6", "AAVE", "Aave", "BINANCE:AAVEUSDT"),
	("0xdf0Fb4e4F928d2dCB76f438575fDD8682386e13C", "UNI", "Uniswap", "BINANCE:UNIUSDT"),
	("0x10C8264C0935b3B9870013e057f330Ff3e9C56dC", "SOL", "Solana", "BINANCE:SOLUSDT"),
	("0xbaf9327b6564454F4a3364C33eFeEf032b4b4444", "DOGE", "Dogecoin", "BINANCE:DOGEUSDT"),
)

BASE_PRICE_FEEDS = _feeds(
	ChainId.BASE,
	("0x64c911996D3c6aC71f9b455B1E8E7266BcbD848F", "BTC", "Bitcoin", "BINANCE:BTCUSDT"),
	("0x71041dddad3595F9CEd3DcCFBe3D1F4b0a16Bb70", "ETH", "Ethereum", "BINANCE:ETHUSDT"),
	("0x17CAb8FE31E32f08326e5E27412894e49B0f9D65", "LINK", "Chainlink", "BINANCE:LINKUSDT"),
)

BSC_PRICE_FEEDS = _feeds(
	ChainId.BSC,
	("0x264990fbd0A4796A3E3d8E37C4d5F87a3aCa5Ebf", "BTC", "Bitcoin", "BINANCE:BTCUSDT"),
	("0x9ef1B8c0E4F7dc8bF5719Ea496883DC6401d5b2e", "ETH", "Ethereum", "BINANCE:ETHUSDT"),
	("0x0567F2323251f0Aab15c8dFb1967E4e8A7D42aeE", "BNB", "Binance Coin", "BINANCE:BNBUSDT"),
)


PRICE_FEEDS: dict[int, tuple[TokenDescriptor, ...]] = {
	ChainId.POLYGON: POLYGON_PRICE_FEEDS,
	ChainId.BASE: BASE_PRICE_FEEDS,
	ChainId.BSC: BSC_PRICE_FEEDS,
}


def feeds_for_chain(chain_id, feeds: dict | None = None) -> tuple[TokenDescriptor, ...]:
	"""
	Catalog entries for one chain; an unknown chain yields an empty tuple
	"""
	catalog = PRICE_FEEDS if feeds is None else feeds
	return tuple(catalog.get(chain_id, ()))
