"""Database models for the game.


Tables:
- UserAccount: one row per connected wallet (address is stored lower-cased)
- GameToken: token registry, synced from the price-feed catalog
- Game
- GameCoinFeed: coins allowed in a game
- GameParticipant
- GameParticipantCoinFeed: coins a participant picked
- GameResult
- AffiliateEntry

Every foreign key is PROTECT: a parent row cannot be deleted while children
still point at it, so a full reset has to walk the tables children-first.
"""

import uuid
from django.db import models
from django.db.models.functions import Lower

from .constants import ChainId, DEFAULT_QUOTE


class UserAccount(models.Model):
	"""
	A player identity keyed by wallet address
	"""
	id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
	address = models.CharField(max_length=42, unique=True) # lower-cased 0x address
	username = models.CharField(max_length=64, null=True, blank=True)
	profile_image_url = models.URLField(max_length=500, null=True, blank=True)
	background_image_url = models.URLField(max_length=500, null=True, blank=True)
	created_at = models.DateTimeField(auto_now_add=True)
	updated_at = models.DateTimeField(auto_now=True)

	class Meta:
		constraints = [
			# Authoritative username guard: "Alice" and "alice" cannot coexist
			models.UniqueConstraint(Lower("username"), name="unique_username_ci"),
		]

	def save(self, *args, **kwargs):
		self.address = self.address.lower()
		super().save(*args, **kwargs)

	def __str__(self):
		return self.username or self.address


class GameToken(models.Model):
	"""
	Registry row mirroring one catalog entry.

	Uniqueness: (chain_id, address), so the same contract on two chains is two rows.
	"""
	id = models.BigAutoField(primary_key=True)
	chain_id = models.IntegerField(choices=ChainId.choices)
	address = models.CharField(max_length=42)
	symbol = models.CharField(max_length=32)
	name = models.CharField(max_length=100)
	base = models.CharField(max_length=32)
	base_name = models.CharField(max_length=100)
	quote = models.CharField(max_length=16, default=DEFAULT_QUOTE)
	logo = models.URLField(max_length=500, null=True, blank=True)
	tv = models.CharField(max_length=64, null=True, blank=True) # TradingView ticker
	is_active = models.BooleanField(default=True)
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		constraints = [
			models.UniqueConstraint(fields=["chain_id", "address"], name="unique_token_per_chain"),
		]
		indexes = [
			models.Index(fields=["chain_id", "symbol"]),
		]

	def __str__(self):
		return f"{self.symbol}@{self.chain_id}"


class Game(models.Model):
	id = models.BigAutoField(primary_key=True)
	chain_id = models.IntegerField(choices=ChainId.choices)
	onchain_id = models.CharField(max_length=78) # game id on the factory contract
	creator = models.ForeignKey(UserAccount, on_delete=models.PROTECT, related_name="created_games")
	created_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		unique_together = (("chain_id", "onchain_id"),)


class GameCoinFeed(models.Model):
	id = models.BigAutoField(primary_key=True)
	game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="coin_feeds")
	token = models.ForeignKey(GameToken, on_delete=models.PROTECT, related_name="game_feeds")


class GameParticipant(models.Model):
	id = models.BigAutoField(primary_key=True)
	game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="participants")
	user = models.ForeignKey(UserAccount, on_delete=models.PROTECT, related_name="participations")
	joined_at = models.DateTimeField(auto_now_add=True)

	class Meta:
		unique_together = (("game", "user"),)


class GameParticipantCoinFeed(models.Model):
	id = models.BigAutoField(primary_key=True)
	participant = models.ForeignKey(GameParticipant, on_delete=models.PROTECT, related_name="coin_feeds")
	token = models.ForeignKey(GameToken, on_delete=models.PROTECT, related_name="participant_feeds")
	is_captain = models.BooleanField(default=False)


class GameResult(models.Model):
	id = models.BigAutoField(primary_key=True)
	game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="results")
	participant = models.ForeignKey(GameParticipant, on_delete=models.PROTECT, related_name="results")
	position = models.PositiveIntegerField()
	score = models.DecimalField(max_digits=30, decimal_places=8, default=0)


class AffiliateEntry(models.Model):
	id = models.BigAutoField(primary_key=True)
	game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="affiliate_entries")
	user = models.ForeignKey(UserAccount, on_delete=models.PROTECT, related_name="affiliate_entries")
	affiliate = models.ForeignKey(UserAccount, on_delete=models.PROTECT, related_name="referred_entries")
	created_at = models.DateTimeField(auto_now_add=True)
