"""Public API surface consumed by the game UI.

- /tokens, /tokens/resolve: registry listing and symbol → address/ticker resolution
- /user/*: account create-or-get, lookup by address or username, profile update, username availability
"""

from django.urls import path
from .views_ops import (
	health, csrf, username_exists, create_or_get_user, get_user_by_address, get_user_by_username, update_user
)
from .views_read import resolve, tokens


urlpatterns = [
	path("health", health),
	path("csrf", csrf),
	path("tokens", tokens),
	path("tokens/resolve", resolve),
	path("user/username-exists", username_exists),
	path("user/create-or-get", create_or_get_user),
	path("user/get-by-address", get_user_by_address),
	path("user/get-by-username", get_user_by_username),
	path("user/update", update_user),
]
