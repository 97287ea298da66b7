from __future__ import annotations

import json

import pytest
from django.test import Client

from core.models import UserAccount
from core.services import sync_tokens

from .conftest import ALICE_WALLET, BOB_WALLET


@pytest.fixture
def client() -> Client:
	return Client()


def post(client: Client, url: str, payload: dict):
	return client.post(url, data=json.dumps(payload), content_type="application/json")


def test_health(client) -> None:
	assert client.get("/api/health").json() == {"ok": True}


def test_resolve_symbol(client) -> None:
	body = client.get("/api/tokens/resolve", {"symbol": "eth", "chainId": "137"}).json()

	assert body["symbol"] == "ETH"
	assert body["isSymbol"] is True
	assert body["tv"] == "BINANCE:ETHUSDT"
	assert body["name"] == "Ethereum"
	assert body["address"].startswith("0x")


def test_resolve_miss_on_unknown_chain(client) -> None:
	body = client.get("/api/tokens/resolve", {"symbol": "BTC", "chainId": "999999"}).json()

	assert body["address"] is None
	assert body["tv"] is None
	assert body["isSymbol"] is True


@pytest.mark.django_db
def test_token_listing(client) -> None:
	sync_tokens(137)

	symbols = [token["symbol"] for token in client.get("/api/tokens", {"chainId": "137"}).json()["tokens"]]

	assert "ETH" in symbols
	assert symbols == sorted(symbols)
	assert client.get("/api/tokens").status_code == 400


@pytest.mark.django_db
def test_create_or_get_user(client) -> None:
	first = post(client, "/api/user/create-or-get", {"address": ALICE_WALLET.upper().replace("0X", "0x")})
	second = post(client, "/api/user/create-or-get", {"address": ALICE_WALLET})

	assert first.status_code == 200
	assert first.json()["created"] is True
	assert second.json()["created"] is False
	assert first.json()["user"]["id"] == second.json()["user"]["id"]
	assert second.json()["user"]["address"] == ALICE_WALLET


@pytest.mark.django_db
def test_create_or_get_rejects_bad_address(client) -> None:
	response = post(client, "/api/user/create-or-get", {"address": "nope"})

	assert response.status_code == 400
	assert response.json()["success"] is False
	assert UserAccount.objects.count() == 0


@pytest.mark.django_db
def test_username_exists(client) -> None:
	UserAccount.objects.create(address=ALICE_WALLET, username="alice")

	assert post(client, "/api/user/username-exists", {"username": "ALICE"}).json() == {"exists": True}
	assert post(
		client, "/api/user/username-exists", {"username": "ALICE", "currentUsername": "alice"}
	).json() == {"exists": False}
	assert post(client, "/api/user/username-exists", {"username": "carol"}).json() == {"exists": False}

	missing = post(client, "/api/user/username-exists", {})
	assert missing.status_code == 400
	assert missing.json()["exists"] is False


def test_username_exists_is_post_only(client) -> None:
	response = client.get("/api/user/username-exists")

	assert response.status_code == 405
	assert response.json()["exists"] is False


@pytest.mark.django_db
def test_get_user_by_address(client) -> None:
	UserAccount.objects.create(address=ALICE_WALLET, username="alice")

	found = post(client, "/api/user/get-by-address", {"address": ALICE_WALLET})
	missing = post(client, "/api/user/get-by-address", {"address": BOB_WALLET})

	assert found.json()["user"]["username"] == "alice"
	assert missing.status_code == 404


@pytest.mark.django_db
def test_update_user(client) -> None:
	UserAccount.objects.create(address=ALICE_WALLET, username="alice")
	UserAccount.objects.create(address=BOB_WALLET, username="bob")

	taken = post(client, "/api/user/update", {"address": BOB_WALLET, "username": "Alice"})
	renamed = post(client, "/api/user/update", {"address": BOB_WALLET, "username": "robert"})
	unknown = post(client, "/api/user/update", {"address": "0x" + "c3" * 20, "username": "carol"})

	assert taken.status_code == 400
	assert taken.json()["error"] == "Username already taken"
	assert renamed.json()["user"]["username"] == "robert"
	assert unknown.status_code == 404


def test_invalid_json_is_rejected(client) -> None:
	response = client.post("/api/user/create-or-get", data="{not json", content_type="application/json")

	assert response.status_code == 400


@pytest.mark.django_db
def test_get_user_by_username(client) -> None:
	UserAccount.objects.create(address=ALICE_WALLET, username="alice")

	found = post(client, "/api/user/get-by-username", {"username": "ALICE"})
	missing = post(client, "/api/user/get-by-username", {"username": "carol"})
	blank = post(client, "/api/user/get-by-username", {"username": ""})
	not_text = post(client, "/api/user/get-by-username", {"username": 12})

	assert found.status_code == 200
	assert found.json()["user"]["address"] == ALICE_WALLET
	assert missing.status_code == 404
	assert blank.status_code == 400
	assert not_text.status_code == 400
	assert client.get("/api/user/get-by-username").status_code == 405


def test_resolve_echoes_normalized_chain_id(client) -> None:
	known = client.get("/api/tokens/resolve", {"symbol": "eth", "chainId": "137"}).json()
	garbage = client.get("/api/tokens/resolve", {"symbol": "eth", "chainId": "polygon"}).json()

	assert known["chainId"] == 137
	assert garbage["chainId"] is None
	assert garbage["address"] is None
