"""
Open an isolated tab on a remote browser.

Prerequisites:
1. Set BROWSER_WS_ENDPOINT, e.g. wss://chrome.browserless.io/?token=<your token>
   or ws://localhost:9222/devtools/browser/<id> for a local Chrome started with --remote-debugging-port
"""

import asyncio

from dotenv import load_dotenv

from remote_prerender import PrerenderJob, RemoteBrowserDriver, setup_logging

load_dotenv()


class PrintingPageDriver:
	"""Minimal page driver: enables the Page domain, navigates and prints the title."""

	async def set_up_events(self, tab):
		await tab.cdp_client.send.Page.enable()
		return tab

	async def load_url_then_wait_for_page_load_event(self, tab):
		await tab.cdp_client.send.Page.navigate(params={'url': tab.prerender.url})
		await asyncio.sleep(2)

	async def execute_javascript(self, tab, javascript):
		result = await tab.cdp_client.send.Runtime.evaluate(params={'expression': javascript, 'returnByValue': True})
		return result['result'].get('value')

	async def close_tab(self, tab):
		await tab.browser.send.Target.disposeBrowserContext(params={'browserContextId': tab.browser_context_id})
		await tab.cdp_client.stop()
		await tab.browser.stop()


async def main():
	setup_logging()
	driver = RemoteBrowserDriver(page_driver=PrintingPageDriver())  # type: ignore[arg-type]
	try:
		await driver.connect()
		print(f'Connected to {driver.version} ({driver.original_user_agent})')

		tab = await driver.open_tab(PrerenderJob(url='https://example.com'))
		try:
			await driver.load_url_then_wait_for_page_load_event(tab)
			print(f'Title: {await driver.execute_javascript(tab, "document.title")}')
		finally:
			await driver.close_tab(tab)
	finally:
		await driver.stop()


if __name__ == '__main__':
	asyncio.run(main())
