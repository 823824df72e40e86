"""Endpoint resolution: classify the configured address and turn it into a dialable DevTools endpoint."""

import logging
from urllib.parse import parse_qs, urlparse

from remote_prerender.browser.gateway.gateway import GatewayClient, fetch_version_info
from remote_prerender.browser.gateway.views import TOKEN_PARAM
from remote_prerender.browser.views import (
	DEFAULT_BROWSER_VERSION,
	DEFAULT_USER_AGENT,
	ConfigurationError,
	EndpointConfig,
	ResolvedEndpoint,
)
from remote_prerender.config import CONFIG

logger = logging.getLogger(__name__)

# Path segment present in every raw DevTools WebSocket endpoint
DEVTOOLS_PATH_SEGMENT = '/devtools/'

_SUPPORTED_SCHEMES = ('ws', 'wss', 'http', 'https')


def _extract_token(endpoint: str) -> str | None:
	values = parse_qs(urlparse(endpoint).query).get(TOKEN_PARAM)
	return values[0] if values else None


def load_endpoint_config(explicit: str | None = None) -> EndpointConfig:
	"""Read the endpoint from the explicit option, falling back to BROWSER_WS_ENDPOINT.

	Raises ConfigurationError right away if neither is set or the address is unusable.
	"""
	if explicit:
		endpoint, source = explicit, 'option'
	else:
		endpoint, source = CONFIG.BROWSER_WS_ENDPOINT, 'environment'

	if not endpoint:
		logger.error(
			'BROWSER_WS_ENDPOINT not provided. Set the BROWSER_WS_ENDPOINT environment variable or pass browser_ws_endpoint'
		)
		raise ConfigurationError('missing endpoint')

	endpoint = endpoint.strip()
	parsed_url = urlparse(endpoint)
	if parsed_url.scheme.lower() not in _SUPPORTED_SCHEMES or not parsed_url.netloc:
		raise ConfigurationError(f'invalid endpoint: {endpoint!r} (expected ws://, wss://, http:// or https://)')

	return EndpointConfig(endpoint=endpoint, token=_extract_token(endpoint), source=source)


def is_gateway_endpoint(endpoint: str) -> bool:
	"""A gateway endpoint carries a token, has a root-like path, or is not a DevTools path."""
	parsed_url = urlparse(endpoint)
	if TOKEN_PARAM in parse_qs(parsed_url.query, keep_blank_values=True):
		return True
	if parsed_url.path in ('', '/'):
		return True
	return DEVTOOLS_PATH_SEGMENT not in parsed_url.path


class EndpointResolver:
	"""Turns an EndpointConfig into a ResolvedEndpoint.

	Gateway endpoints go through the discovery handshake and fail hard on any error.
	Direct endpoints are used verbatim, with a best-effort identity probe.
	"""

	def __init__(self, gateway_client: GatewayClient | None = None, http_timeout: float | None = None):
		self.http_timeout = http_timeout if http_timeout is not None else CONFIG.REMOTE_PRERENDER_HTTP_TIMEOUT
		self.gateway_client = gateway_client or GatewayClient(timeout=self.http_timeout)

	async def resolve(self, config: EndpointConfig) -> ResolvedEndpoint:
		if is_gateway_endpoint(config.endpoint):
			return await self._resolve_gateway(config)
		return await self._resolve_direct(config)

	async def _resolve_gateway(self, config: EndpointConfig) -> ResolvedEndpoint:
		logger.debug('Endpoint classified as gateway, running discovery handshake')
		version = await self.gateway_client.discover(config.endpoint, token=config.token)
		return ResolvedEndpoint(
			ws_url=version.webSocketDebuggerUrl,
			mode='gateway',
			user_agent=version.user_agent,
			browser_version=version.browser,
		)

	async def _resolve_direct(self, config: EndpointConfig) -> ResolvedEndpoint:
		logger.debug(f'Endpoint classified as direct DevTools endpoint: {config.endpoint}')
		user_agent, browser_version = DEFAULT_USER_AGENT, DEFAULT_BROWSER_VERSION

		try:
			response, data = await fetch_version_info(config.endpoint, timeout=self.http_timeout)
			if isinstance(data, dict):
				user_agent = data.get('User-Agent') or user_agent
				browser_version = data.get('Browser') or browser_version
			else:
				logger.debug(f'Version check returned HTTP {response.status_code}, keeping default identity')
		except Exception as e:
			# The endpoint may still accept WebSocket connections
			logger.warning(f'Version check failed, but proceeding with WebSocket endpoint: {type(e).__name__}: {e}')

		return ResolvedEndpoint(
			ws_url=config.endpoint,
			mode='direct',
			user_agent=user_agent,
			browser_version=browser_version,
		)
