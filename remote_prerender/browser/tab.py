import logging

from cdp_use import CDPClient
from cdp_use.cdp.target import TargetID
from pydantic import BaseModel, ConfigDict

from remote_prerender.browser.page_driver import PageLifecycleDriver
from remote_prerender.browser.views import PrerenderJob

logger = logging.getLogger(__name__)


class Tab(BaseModel):
	"""A page-level connection owned by exactly one job and one browser context.

	Carries back-references to the browser-level connection and the browser context
	so the page-lifecycle driver can tear both down when the job ends.
	"""

	model_config = ConfigDict(arbitrary_types_allowed=True, revalidate_instances='never')

	cdp_client: CDPClient
	target_id: TargetID
	browser_context_id: str
	browser: CDPClient
	prerender: PrerenderJob

	@property
	def url(self) -> str | None:
		return self.prerender.url


async def assemble_tab(
	browser: CDPClient,
	browser_context_id: str,
	target_id: TargetID,
	page_client: CDPClient,
	job: PrerenderJob,
	page_driver: PageLifecycleDriver,
) -> Tab:
	"""Attach fresh job state to a dialed target and hand it to the event wiring.

	Errors raised by page_driver.set_up_events() propagate unchanged.
	"""
	job.errors = []
	job.requests = {}
	job.num_requests_in_flight = 0

	tab = Tab(
		cdp_client=page_client,
		target_id=target_id,
		browser_context_id=browser_context_id,
		browser=browser,
		prerender=job,
	)
	logger.debug(f'Assembled tab {target_id[-4:]} in context {browser_context_id[-4:]} for job {job.id[-4:]}')
	return await page_driver.set_up_events(tab)
