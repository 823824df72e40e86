"""Bounded fixed-delay retry around DevTools WebSocket dials.

A freshly created target may not be dialable right away while the remote side
finishes its bookkeeping, so every dial goes through the same small retry budget.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar
from urllib.parse import urlparse, urlunparse

from cdp_use import CDPClient

from remote_prerender.config import CONFIG

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Use 200MB limit to handle pages with very large DOMs
MAX_WS_FRAME_SIZE = 200 * 1024 * 1024


async def retry_async(
	dial: Callable[[], Awaitable[T]],
	attempts: int,
	delay: float,
	label: str | None = None,
) -> T:
	"""Call dial() up to `attempts` times, sleeping `delay` seconds between failures.

	The exception from the final attempt is re-raised as-is. Socket failures arrive
	as ConnectionError/OSError; handshake rejections (websockets InvalidStatus on a
	401/403) keep their own type.
	"""
	if attempts < 1:
		raise ValueError(f'attempts must be at least 1, got {attempts}')

	for attempt in range(1, attempts + 1):
		try:
			return await dial()
		except Exception as e:
			remaining = attempts - attempt
			logger.warning(
				f'⚠️ Cannot connect to browser (attempt {attempt}/{attempts}, remaining={remaining}, url={label}): '
				f'{type(e).__name__}: {e}'
			)
			if remaining <= 0:
				raise
		await asyncio.sleep(delay)

	raise RuntimeError('Retry loop completed without return or exception')


async def open_cdp_client(ws_url: str, headers: dict[str, str] | None = None) -> CDPClient:
	"""Open one DevTools WebSocket connection, closing it again if the handshake fails."""
	client = CDPClient(ws_url, additional_headers=headers, max_ws_frame_size=MAX_WS_FRAME_SIZE)
	try:
		await client.start()
	except Exception:
		try:
			await client.stop()
		except Exception as cleanup_error:
			logger.debug(f'Error closing CDP client after failed dial: {cleanup_error}')
		raise
	return client


async def connect_with_retry(
	ws_url: str,
	*,
	attempts: int | None = None,
	delay: float | None = None,
	headers: dict[str, str] | None = None,
	label: str | None = None,
) -> CDPClient:
	"""Dial a browser- or page-level DevTools endpoint with the bounded retry policy."""
	attempts = attempts if attempts is not None else CONFIG.REMOTE_PRERENDER_DIAL_ATTEMPTS
	delay = delay if delay is not None else CONFIG.REMOTE_PRERENDER_DIAL_DELAY
	return await retry_async(lambda: open_cdp_client(ws_url, headers=headers), attempts, delay, label=label)


def target_ws_url(browser_ws_url: str, target_id: str) -> str:
	"""Build the page-level endpoint for a target from the browser-level endpoint.

	Keeps scheme, host, any path prefix before /devtools/ and the query string,
	so gateway tokens travel along with the page connection.
	"""
	parsed_url = urlparse(browser_ws_url)
	path = parsed_url.path
	devtools_index = path.find('/devtools/')
	prefix = path[:devtools_index] if devtools_index >= 0 else path.rstrip('/')
	return urlunparse((parsed_url.scheme, parsed_url.netloc, f'{prefix}/devtools/page/{target_id}', '', parsed_url.query, ''))
