"""Account endpoints used by the UI: create-or-get, lookup, rename, username checks."""

import json
import logging
from django.http import JsonResponse
from django.middleware.csrf import get_token
from core.exceptions import AccountNotFound, InvalidInput, TransientStoreError, UsernameTaken
from core.services import (
	create_or_get_account, get_account_by_address, get_account_by_username, is_username_taken, update_account
)

logger = logging.getLogger(__name__)


def health(request):
	return JsonResponse({"ok": True})


def csrf(request):
	# Forces creation/rotation of the CSRF token AND sets 'csrftoken' cookie
	return JsonResponse({"csrftoken": get_token(request)})


# --- Helpers -----------------------------------------------------------------

def _method_not_allowed(**extra):
	return JsonResponse({"error": "Method not allowed", **extra}, status=405)


def _json_body(request) -> dict:
	try:
		body = json.loads(request.body or b"{}")
	except ValueError:
		raise InvalidInput("Invalid JSON")
	if not isinstance(body, dict):
		raise InvalidInput("JSON object expected")
	return body


def _user_payload(user):
	return {
		"id": str(user.id),
		"address": user.address,
		"username": user.username,
		"profileImageURL": user.profile_image_url,
		"backgroundImageURL": user.background_image_url,
		"createdAt": user.created_at.isoformat(),
		"updatedAt": user.updated_at.isoformat(),
	}


# --- Views -------------------------------------------------------------------

def username_exists(request):
	"""
	POST {username, currentUsername?}: is the handle taken by someone else?
	"""
	if request.method != "POST":
		return _method_not_allowed(exists=False)
	try:
		body = _json_body(request)
		username = body.get("username")
		if not username or not isinstance(username, str):
			raise InvalidInput("Username is required")
		exists = is_username_taken(username, body.get("currentUsername"))
	except InvalidInput as e:
		return JsonResponse({"error": str(e), "exists": False}, status=400)
	except TransientStoreError:
		logger.exception("username check failed")
		return JsonResponse({"error": "Service unavailable", "exists": False}, status=503)
	return JsonResponse({"exists": exists})


def create_or_get_user(request):
	"""
	POST {address}: return the wallet's account, creating it on first connection
	"""
	if request.method != "POST":
		return _method_not_allowed(success=False)
	try:
		body = _json_body(request)
		user, created = create_or_get_account(body.get("address"))
	except InvalidInput as e:
		return JsonResponse({"success": False, "error": str(e)}, status=400)
	except TransientStoreError as e:
		return JsonResponse({"success": False, "error": str(e), "retryable": True}, status=503)
	return JsonResponse({"success": True, "created": created, "user": _user_payload(user)})


def get_user_by_address(request):
	"""
	POST {address}: account lookup, 404 if the wallet never connected
	"""
	if request.method != "POST":
		return _method_not_allowed(success=False)
	try:
		body = _json_body(request)
		user = get_account_by_address(body.get("address"))
	except InvalidInput as e:
		return JsonResponse({"success": False, "error": str(e)}, status=400)
	except TransientStoreError as e:
		return JsonResponse({"success": False, "error": str(e), "retryable": True}, status=503)
	if user is None:
		return JsonResponse({"success": False, "error": "User not found"}, status=404)
	return JsonResponse({"success": True, "user": _user_payload(user)})


def get_user_by_username(request):
	"""
	POST {username}: profile lookup by handle, case-insensitive
	"""
	if request.method != "POST":
		return _method_not_allowed(success=False)
	try:
		body = _json_body(request)
		user = get_account_by_username(body.get("username"))
	except InvalidInput as e:
		return JsonResponse({"success": False, "error": str(e)}, status=400)
	except TransientStoreError as e:
		return JsonResponse({"success": False, "error": str(e), "retryable": True}, status=503)
	if user is None:
		return JsonResponse({"success": False, "error": "User not found"}, status=404)
	return JsonResponse({"success": True, "user": _user_payload(user)})


def update_user(request):
	"""
	POST {address, username?, profileImageURL?, backgroundImageURL?}
	"""
	if request.method != "POST":
		return _method_not_allowed(success=False)
	try:
		body = _json_body(request)
		user = update_account(
			body.get("address"),
			username=body.get("username"),
			profile_image_url=body.get("profileImageURL"),
			background_image_url=body.get("backgroundImageURL"),
		)
	except InvalidInput as e:
		return JsonResponse({"success": False, "error": str(e)}, status=400)
	except UsernameTaken:
		return JsonResponse({"success": False, "error": "Username already taken"}, status=400)
	except AccountNotFound:
		return JsonResponse({"success": False, "error": "User not found"}, status=404)
	except TransientStoreError as e:
		return JsonResponse({"success": False, "error": str(e), "retryable": True}, status=503)
	return JsonResponse({"success": True, "user": _user_payload(user)})
