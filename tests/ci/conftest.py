"""Shared fixtures for remote_prerender tests."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from cdp_use import CDPClient


class FakePageDriver:
	"""Stand-in for the sibling page-lifecycle driver; records every call it receives."""

	def __init__(self, set_up_error: Exception | None = None):
		self.set_up_error = set_up_error
		self.calls: list[tuple[str, tuple[Any, ...]]] = []
		self.state_at_set_up: dict[str, Any] | None = None

	async def set_up_events(self, tab):
		self.calls.append(('set_up_events', (tab,)))
		self.state_at_set_up = {
			'errors': list(tab.prerender.errors),
			'requests': dict(tab.prerender.requests),
			'num_requests_in_flight': tab.prerender.num_requests_in_flight,
		}
		if self.set_up_error is not None:
			raise self.set_up_error
		return tab

	async def load_url_then_wait_for_page_load_event(self, tab):
		self.calls.append(('load_url_then_wait_for_page_load_event', (tab,)))

	async def check_if_page_is_done_loading(self, tab):
		self.calls.append(('check_if_page_is_done_loading', (tab,)))
		return True

	async def execute_javascript(self, tab, javascript):
		self.calls.append(('execute_javascript', (tab, javascript)))
		return {'result': 'ok'}

	async def parse_html_from_page(self, tab):
		self.calls.append(('parse_html_from_page', (tab,)))
		return '<html></html>'

	async def capture_screenshot(self, tab, format, full_page):
		self.calls.append(('capture_screenshot', (tab, format, full_page)))
		return b'png-bytes'

	async def print_to_pdf(self, tab, options):
		self.calls.append(('print_to_pdf', (tab, options)))
		return b'%PDF'

	async def get_har_file(self, tab):
		self.calls.append(('get_har_file', (tab,)))
		return {'log': {'entries': []}}

	async def close_tab(self, tab):
		self.calls.append(('close_tab', (tab,)))


def make_cdp_client(browser_context_id: str = 'context-1', target_id: str = 'target-1') -> MagicMock:
	"""Build a CDPClient double that passes isinstance checks and answers Target commands."""
	client = MagicMock(spec=CDPClient)
	client.start = AsyncMock()
	client.stop = AsyncMock()
	client.send = MagicMock()
	client.send.Target = MagicMock()
	client.send.Target.createBrowserContext = AsyncMock(return_value={'browserContextId': browser_context_id})
	client.send.Target.createTarget = AsyncMock(return_value={'targetId': target_id})
	client.send.Target.disposeBrowserContext = AsyncMock(return_value={})
	return client


@pytest.fixture
def page_driver() -> FakePageDriver:
	return FakePageDriver()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
	"""Keep the developer's environment out of endpoint and retry settings."""
	for env_var in (
		'BROWSER_WS_ENDPOINT',
		'REMOTE_PRERENDER_CONNECT_TIMEOUT',
		'REMOTE_PRERENDER_DIAL_ATTEMPTS',
		'REMOTE_PRERENDER_DIAL_DELAY',
		'REMOTE_PRERENDER_HTTP_TIMEOUT',
	):
		monkeypatch.delenv(env_var, raising=False)


@pytest.fixture
def cdp_client_factory():
	return make_cdp_client
