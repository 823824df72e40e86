"""Configuration for remote-prerender with lazy loading of environment variables."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _get_float(env_var: str, default: float) -> float:
	"""Parse a non-negative float from the environment, falling back to the default."""
	raw_value = os.getenv(env_var)
	if not raw_value:
		return default
	try:
		value = float(raw_value)
	except (ValueError, TypeError):
		logger.warning(f'{env_var}={raw_value} is not a valid number, using default {default}')
		return default
	if value < 0:
		logger.warning(f'{env_var}={raw_value} is negative, using default {default}')
		return default
	return value


def _get_int(env_var: str, default: int) -> int:
	raw_value = os.getenv(env_var)
	if not raw_value:
		return default
	try:
		value = int(raw_value)
	except (ValueError, TypeError):
		logger.warning(f'{env_var}={raw_value} is not a valid integer, using default {default}')
		return default
	if value < 1:
		logger.warning(f'{env_var}={raw_value} must be at least 1, using default {default}')
		return default
	return value


class Config:
	"""Environment-backed settings. Every property re-reads the environment on access."""

	@property
	def BROWSER_WS_ENDPOINT(self) -> str | None:
		return os.getenv('BROWSER_WS_ENDPOINT') or None

	@property
	def REMOTE_PRERENDER_LOGGING_LEVEL(self) -> str:
		return os.getenv('REMOTE_PRERENDER_LOGGING_LEVEL', 'info').lower()

	@property
	def CDP_LOGGING_LEVEL(self) -> str:
		return os.getenv('CDP_LOGGING_LEVEL', 'WARNING')

	@property
	def REMOTE_PRERENDER_CONNECT_TIMEOUT(self) -> float:
		return _get_float('REMOTE_PRERENDER_CONNECT_TIMEOUT', 20.0)

	@property
	def REMOTE_PRERENDER_DIAL_ATTEMPTS(self) -> int:
		return _get_int('REMOTE_PRERENDER_DIAL_ATTEMPTS', 5)

	@property
	def REMOTE_PRERENDER_DIAL_DELAY(self) -> float:
		return _get_float('REMOTE_PRERENDER_DIAL_DELAY', 0.5)

	@property
	def REMOTE_PRERENDER_HTTP_TIMEOUT(self) -> float:
		return _get_float('REMOTE_PRERENDER_HTTP_TIMEOUT', 10.0)


CONFIG = Config()
