from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
	from remote_prerender.browser.tab import Tab


@runtime_checkable
class PageLifecycleDriver(Protocol):
	"""Page-level operations supplied by a sibling driver over an already-open Tab.

	The remote driver only gets a Tab into existence; loading, extraction, capture
	and teardown (including disposing the tab's browser context) happen here.
	"""

	async def set_up_events(self, tab: 'Tab') -> 'Tab': ...

	async def load_url_then_wait_for_page_load_event(self, tab: 'Tab') -> Any: ...

	async def check_if_page_is_done_loading(self, tab: 'Tab') -> bool: ...

	async def execute_javascript(self, tab: 'Tab', javascript: str) -> Any: ...

	async def parse_html_from_page(self, tab: 'Tab') -> str: ...

	async def capture_screenshot(self, tab: 'Tab', format: str, full_page: bool) -> bytes: ...

	async def print_to_pdf(self, tab: 'Tab', options: dict[str, Any]) -> bytes: ...

	async def get_har_file(self, tab: 'Tab') -> dict[str, Any]: ...

	async def close_tab(self, tab: 'Tab') -> None: ...
