from remote_prerender.browser import (
	ConfigurationError,
	ConnectTimeoutError,
	GatewayHandshakeError,
	PageLifecycleDriver,
	PrerenderJob,
	RemoteBrowserDriver,
	Tab,
)
from remote_prerender.logging_config import setup_logging

__all__ = [
	'ConfigurationError',
	'ConnectTimeoutError',
	'GatewayHandshakeError',
	'PageLifecycleDriver',
	'PrerenderJob',
	'RemoteBrowserDriver',
	'Tab',
	'setup_logging',
]
