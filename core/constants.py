"""Chain identifiers and token conventions shared across the service.


- ChainId enumerates the EVM networks the game knows about.
- DEFAULT_QUOTE is the quote currency assumed when a price feed omits one.
- Wallet and contract addresses are 0x-prefixed 20-byte hex strings.
"""

import re

from django.db import models


class ChainId(models.IntegerChoices):
	ETHEREUM = 1, "Ethereum"
	ROPSTEN = 3, "Ropsten"
	RINKEBY = 4, "Rinkeby"
	OPTIMISM = 10, "Optimism"
	BSC = 56, "BSC"
	POLYGON = 137, "Polygon"
	FANTOM = 250, "Fantom"
	GOERLI = 420, "Goerli"
	BASE = 8453, "Base"
	CELO = 42220, "Celo"
	AVAX = 43114, "Avalanche"
	MUMBAI = 80001, "Mumbai"


DEFAULT_QUOTE = "USD"

NATIVE_TOKEN_ADDRESS = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"

ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")

# A ticker query is 2-10 letters once trimmed and upper-cased
SYMBOL_RE = re.compile(r"^[A-Z]{2,10}$")


def chain_label(chain_id: int) -> str:
	"""
	Human-readable network name, falling back to the raw id for unknown chains
	"""
	try:
		return ChainId(chain_id).label
	except ValueError:
		return str(chain_id)
