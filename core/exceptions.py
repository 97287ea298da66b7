"""Application errors raised by core services.

Views translate these into HTTP responses; management commands into CommandError.
"""


class InvalidInput(ValueError):
	"""Rejected before any store access (bad address, blank username, ...)"""


class AccountNotFound(LookupError):
	pass


class UsernameTaken(ValueError):
	pass


class TransientStoreError(RuntimeError):
	"""
	Store unreachable or timed out. The failed operation is safe to re-run.
	"""
	retryable = True


class TeardownError(RuntimeError):
	"""
	A reset step failed. Steps listed in `completed` were not rolled back.
	"""

	def __init__(self, step: str, completed: list[str], cause: Exception):
		self.step = step
		self.completed = completed
		self.cause = cause
		super().__init__(f"teardown failed at '{step}' after {len(completed)} step(s): {cause}")
