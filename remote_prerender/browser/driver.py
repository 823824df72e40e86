"""Remote browser driver: connects to a hosted Chromium and opens isolated tabs on it.

There is no local browser process. spawn(), on_close() and kill() exist so the
driver fits wherever a process-owning driver is expected, and do nothing.
"""

import logging
from collections.abc import Callable
from typing import Any

from bubus import EventBus
from cdp_use import CDPClient

from remote_prerender.browser.endpoint import EndpointResolver, load_endpoint_config
from remote_prerender.browser.events import BrowserConnectedEvent, TabBootstrapStateEvent
from remote_prerender.browser.gateway.gateway import redact_token
from remote_prerender.browser.guard import ConnectionGuard
from remote_prerender.browser.page_driver import PageLifecycleDriver
from remote_prerender.browser.retry import connect_with_retry, target_ws_url
from remote_prerender.browser.tab import Tab, assemble_tab
from remote_prerender.browser.views import (
	DEFAULT_BROWSER_VERSION,
	DEFAULT_USER_AGENT,
	BootstrapState,
	NotConnectedError,
	PrerenderJob,
	ResolvedEndpoint,
)

logger = logging.getLogger(__name__)


class RemoteBrowserDriver:
	"""Driver for a browser reachable only over the network.

	```python
	driver = RemoteBrowserDriver(page_driver=chrome_driver, browser_ws_endpoint='wss://gateway.example/?token=abc')
	await driver.connect()
	tab = await driver.open_tab(PrerenderJob(url='https://example.com'))
	await driver.load_url_then_wait_for_page_load_event(tab)
	```

	connect() resolves the endpoint once per driver lifetime. Every open_tab() call
	gets its own browser context, target and job state, so concurrent jobs never
	share mutable state.
	"""

	name = 'Remote Browser'

	def __init__(
		self,
		page_driver: PageLifecycleDriver,
		browser_ws_endpoint: str | None = None,
		*,
		resolver: EndpointResolver | None = None,
		guard: ConnectionGuard | None = None,
		event_bus: EventBus | None = None,
		dial_attempts: int | None = None,
		dial_delay: float | None = None,
	):
		self.page_driver = page_driver
		self.browser_ws_endpoint = browser_ws_endpoint
		self.resolver = resolver or EndpointResolver()
		self.guard = guard or ConnectionGuard()
		self.event_bus = event_bus or EventBus()
		self.dial_attempts = dial_attempts
		self.dial_delay = dial_delay
		self.options: dict[str, Any] = {}
		self.resolved: ResolvedEndpoint | None = None

	def __repr__(self) -> str:
		mode = self.resolved.mode if self.resolved else 'unresolved'
		return f'RemoteBrowserDriver({mode})'

	# --- Process lifecycle (no local process) ---

	async def spawn(self, options: dict[str, Any] | None = None) -> None:
		self.options = dict(options or {})

	def on_close(self, callback: Callable[[], Any]) -> None:
		pass

	def kill(self) -> None:
		pass

	async def stop(self) -> None:
		"""Stop the event bus so the owning event loop can shut down."""
		await self.event_bus.stop(clear=True, timeout=5)

	# --- Resolved endpoint ---

	@property
	def web_socket_debugger_url(self) -> str | None:
		return self.resolved.ws_url if self.resolved else None

	@property
	def original_user_agent(self) -> str:
		return self.resolved.user_agent if self.resolved else DEFAULT_USER_AGENT

	@property
	def version(self) -> str:
		return self.resolved.browser_version if self.resolved else DEFAULT_BROWSER_VERSION

	async def connect(self) -> ResolvedEndpoint:
		"""Resolve the configured endpoint into a dialable DevTools endpoint.

		Raises:
			ConfigurationError: no endpoint configured (raised before the deadline timer starts)
			ConnectTimeoutError: resolution did not finish within the guard's timeout
			GatewayHandshakeError: the gateway discovery handshake failed
		"""
		config = load_endpoint_config(self.browser_ws_endpoint or self.options.get('browser_ws_endpoint'))
		logger.info(f'Connecting to browser via {config.source} endpoint: {redact_token(config.endpoint)}')

		resolved = await self.guard.run(self.resolver.resolve(config))
		self.resolved = resolved

		logger.info(f'✅ Connected to {resolved.mode} browser endpoint ({resolved.browser_version})')
		self.event_bus.dispatch(
			BrowserConnectedEvent(
				cdp_url=redact_token(resolved.ws_url),
				mode=resolved.mode,
				browser_version=resolved.browser_version,
			)
		)
		return resolved

	# --- Tab bootstrap ---

	def _emit_state(self, job: PrerenderJob, state: BootstrapState, **details: Any) -> None:
		logger.debug(f'Job {job.id[-4:]} bootstrap -> {state.value}')
		self.event_bus.dispatch(TabBootstrapStateEvent(job_id=job.id, state=state, url=job.url, **details))

	async def open_tab(self, job: PrerenderJob | dict[str, Any] | None = None) -> Tab:
		"""Create a fresh browser context and page target for one job and return its Tab.

		Steps run strictly in order: dial the browser, create the context, create the
		target, dial the target, assemble the Tab. Any failure is re-raised unchanged
		and no Tab is returned.
		"""
		if self.resolved is None:
			raise NotConnectedError('open_tab() called before connect() resolved the browser endpoint')

		if job is None:
			job = PrerenderJob()
		elif isinstance(job, dict):
			job = PrerenderJob(**job)

		ws_url = self.resolved.ws_url
		browser: CDPClient | None = None
		page_client: CDPClient | None = None
		browser_context_id: str | None = None

		self._emit_state(job, BootstrapState.IDLE)
		try:
			self._emit_state(job, BootstrapState.RESOLVING)
			browser = await connect_with_retry(ws_url, attempts=self.dial_attempts, delay=self.dial_delay, label=job.url)

			self._emit_state(job, BootstrapState.CREATING_CONTEXT)
			context = await browser.send.Target.createBrowserContext()
			browser_context_id = context['browserContextId']
			target = await browser.send.Target.createTarget(
				params={'url': 'about:blank', 'browserContextId': browser_context_id}
			)
			target_id = target['targetId']

			self._emit_state(job, BootstrapState.DIALING_TARGET, target_id=target_id, browser_context_id=browser_context_id)
			page_client = await connect_with_retry(
				target_ws_url(ws_url, target_id), attempts=self.dial_attempts, delay=self.dial_delay, label=job.url
			)

			tab = await assemble_tab(browser, browser_context_id, target_id, page_client, job, self.page_driver)
		except BaseException as e:
			# cancellation releases the half-built context too
			logger.error(f'❌ Failed to open tab for {job.url}: {type(e).__name__}: {e}')
			self._emit_state(job, BootstrapState.FAILED, browser_context_id=browser_context_id, error=f'{type(e).__name__}: {e}')
			await self._discard_partial_tab(browser, browser_context_id, page_client)
			raise

		self._emit_state(
			job, BootstrapState.ASSEMBLED, target_id=tab.target_id, browser_context_id=tab.browser_context_id
		)
		return tab

	async def _discard_partial_tab(
		self, browser: CDPClient | None, browser_context_id: str | None, page_client: CDPClient | None
	) -> None:
		"""Release whatever a failed bootstrap managed to create."""
		if page_client is not None:
			try:
				await page_client.stop()
			except Exception as cleanup_error:
				logger.debug(f'Error closing page connection after failed bootstrap: {cleanup_error}')

		if browser is None:
			return

		if browser_context_id is not None:
			try:
				await browser.send.Target.disposeBrowserContext(params={'browserContextId': browser_context_id})
			except Exception as cleanup_error:
				logger.debug(f'Error disposing browser context after failed bootstrap: {cleanup_error}')

		try:
			await browser.stop()
		except Exception as cleanup_error:
			logger.debug(f'Error closing browser connection after failed bootstrap: {cleanup_error}')

	# --- Page lifecycle, delegated to the sibling driver ---

	async def set_up_events(self, tab: Tab) -> Tab:
		return await self.page_driver.set_up_events(tab)

	async def load_url_then_wait_for_page_load_event(self, tab: Tab) -> Any:
		return await self.page_driver.load_url_then_wait_for_page_load_event(tab)

	async def check_if_page_is_done_loading(self, tab: Tab) -> bool:
		return await self.page_driver.check_if_page_is_done_loading(tab)

	async def execute_javascript(self, tab: Tab, javascript: str) -> Any:
		return await self.page_driver.execute_javascript(tab, javascript)

	async def parse_html_from_page(self, tab: Tab) -> str:
		return await self.page_driver.parse_html_from_page(tab)

	async def capture_screenshot(self, tab: Tab, format: str = 'png', full_page: bool = False) -> bytes:
		return await self.page_driver.capture_screenshot(tab, format, full_page)

	async def print_to_pdf(self, tab: Tab, options: dict[str, Any] | None = None) -> bytes:
		return await self.page_driver.print_to_pdf(tab, options or {})

	async def get_har_file(self, tab: Tab) -> dict[str, Any]:
		return await self.page_driver.get_har_file(tab)

	async def close_tab(self, tab: Tab) -> None:
		await self.page_driver.close_tab(tab)
