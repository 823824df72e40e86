from remote_prerender.browser.driver import RemoteBrowserDriver
from remote_prerender.browser.endpoint import EndpointResolver, is_gateway_endpoint, load_endpoint_config
from remote_prerender.browser.gateway import GatewayHandshakeError
from remote_prerender.browser.guard import ConnectionGuard
from remote_prerender.browser.page_driver import PageLifecycleDriver
from remote_prerender.browser.retry import connect_with_retry, retry_async, target_ws_url
from remote_prerender.browser.tab import Tab, assemble_tab
from remote_prerender.browser.views import (
	BootstrapState,
	ConfigurationError,
	ConnectTimeoutError,
	EndpointConfig,
	NotConnectedError,
	PrerenderJob,
	RemoteBrowserError,
	ResolvedEndpoint,
)

__all__ = [
	'BootstrapState',
	'ConfigurationError',
	'ConnectTimeoutError',
	'ConnectionGuard',
	'EndpointConfig',
	'EndpointResolver',
	'GatewayHandshakeError',
	'NotConnectedError',
	'PageLifecycleDriver',
	'PrerenderJob',
	'RemoteBrowserDriver',
	'RemoteBrowserError',
	'ResolvedEndpoint',
	'Tab',
	'assemble_tab',
	'connect_with_retry',
	'is_gateway_endpoint',
	'load_endpoint_config',
	'retry_async',
	'target_ws_url',
]
