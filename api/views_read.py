"""Read-only endpoints: symbol resolution against the catalog and registry listing."""

from django.http import JsonResponse, HttpResponseBadRequest
from django.db import DatabaseError

from core.models import GameToken
from core.resolver import coerce_chain_id, is_plausible_symbol, resolve_token


def resolve(request):
	"""
	GET: ?symbol=eth&chainId=137 → address / TradingView ticker / name, nulls on a miss
	"""
	symbol = request.GET.get("symbol", "")
	chain_id = coerce_chain_id(request.GET.get("chainId"))
	token = resolve_token(symbol, chain_id)
	return JsonResponse({
		"symbol": symbol.strip().upper(),
		"chainId": chain_id,
		"isSymbol": is_plausible_symbol(symbol),
		"address": token.address if token else None,
		"tv": token.tv if token else None,
		"name": token.base_name if token else None,
	})


def tokens(request):
	"""
	GET: Active registry tokens for ?chainId=, ordered by symbol
	"""
	chain_id = request.GET.get("chainId")
	try:
		chain_id = int(chain_id)
	except (TypeError, ValueError):
		return HttpResponseBadRequest("chainId required")

	try:
		rows = list(GameToken.objects.filter(chain_id=chain_id, is_active=True).order_by("symbol"))
	except DatabaseError:
		return JsonResponse({"error": "Token registry unavailable", "tokens": []}, status=503)

	data = [
		{
			"address": t.address,
			"symbol": t.symbol,
			"name": t.name,
			"quote": t.quote,
			"logo": t.logo,
			"tv": t.tv,
			"chainId": t.chain_id,
		}
		for t in rows
	]
	return JsonResponse({"tokens": data})
