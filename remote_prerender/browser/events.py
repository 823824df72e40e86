"""Event definitions for remote browser bootstrap progress."""

from bubus import BaseEvent

from remote_prerender.browser.views import BootstrapState


class BrowserConnectedEvent(BaseEvent):
	"""The browser endpoint has been resolved and is ready to dial."""

	cdp_url: str
	mode: str
	browser_version: str


class TabBootstrapStateEvent(BaseEvent):
	"""A job's tab bootstrap moved to a new state."""

	job_id: str
	state: BootstrapState
	url: str | None = None
	target_id: str | None = None
	browser_context_id: str | None = None
	error: str | None = None
