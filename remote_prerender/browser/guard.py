import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from remote_prerender.browser.views import ConnectTimeoutError
from remote_prerender.config import CONFIG

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ConnectionGuard:
	"""Bounds an awaitable with a wall-clock deadline and reports exactly one outcome.

	The deadline timer and the awaited work race to settle a one-shot future.
	Whichever settles it first wins; the loser is discarded. A late success after
	the deadline is never returned, and the timer never fires after a success.
	"""

	def __init__(self, timeout: float | None = None):
		self.timeout = timeout if timeout is not None else CONFIG.REMOTE_PRERENDER_CONNECT_TIMEOUT

	async def run(self, work: Awaitable[T]) -> T:
		loop = asyncio.get_running_loop()
		outcome: asyncio.Future[T] = loop.create_future()
		task = asyncio.ensure_future(work)

		def settle_from_task(finished: asyncio.Task) -> None:
			if outcome.done():
				if not finished.cancelled() and finished.exception() is None:
					logger.debug('Discarding endpoint resolution that finished after the deadline')
				return
			if finished.cancelled():
				outcome.cancel()
			elif finished.exception() is not None:
				outcome.set_exception(finished.exception())
			else:
				outcome.set_result(finished.result())

		def settle_from_timer() -> None:
			if outcome.done():
				return
			outcome.set_exception(ConnectTimeoutError(f'Timeout connecting to browser WebSocket endpoint after {self.timeout}s'))
			task.cancel()

		task.add_done_callback(settle_from_task)
		timer = loop.call_later(self.timeout, settle_from_timer)
		try:
			return await outcome
		finally:
			timer.cancel()
			if not task.done():
				# caller was cancelled while waiting
				task.cancel()
