"""Managed browser gateway integration for remote-prerender.

Gateways (browserless and friends) put the DevTools endpoint behind an HTTP
discovery step and token authorization. This module performs that handshake and
returns the real DevTools WebSocket URL, with the token re-attached so the
gateway accepts the subsequent WebSocket connections.
"""

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

import httpx
from pydantic import ValidationError

from remote_prerender.browser.gateway.views import TOKEN_PARAM, VERSION_PATH, GatewayHandshakeError, GatewayVersionResponse

logger = logging.getLogger(__name__)

_HTTP_SCHEMES = {'ws': 'http', 'wss': 'https', 'http': 'http', 'https': 'https'}


def http_origin(endpoint: str) -> str:
	"""Translate a ws:// or wss:// endpoint into its http:// or https:// origin."""
	parsed_url = urlparse(endpoint)
	scheme = _HTTP_SCHEMES.get(parsed_url.scheme.lower())
	if scheme is None or not parsed_url.netloc:
		raise ValueError(f'Unsupported browser endpoint: {endpoint}')
	return urlunparse((scheme, parsed_url.netloc, '', '', '', ''))


def with_token(url: str, token: str) -> str:
	"""Return url with the `token` query parameter set, keeping any other parameters."""
	parsed_url = urlparse(url)
	query = [(key, value) for key, value in parse_qsl(parsed_url.query, keep_blank_values=True) if key != TOKEN_PARAM]
	query.append((TOKEN_PARAM, token))
	return urlunparse(
		(parsed_url.scheme, parsed_url.netloc, parsed_url.path, parsed_url.params, urlencode(query), parsed_url.fragment)
	)


def redact_token(url: str) -> str:
	"""Mask the token query parameter for logging."""
	parsed_url = urlparse(url)
	if not parsed_url.query:
		return url
	query = [
		(key, '***' if key == TOKEN_PARAM else value) for key, value in parse_qsl(parsed_url.query, keep_blank_values=True)
	]
	return urlunparse(parsed_url._replace(query=urlencode(query, safe='*')))


async def fetch_version_info(
	endpoint: str, headers: dict[str, str] | None = None, timeout: float = 10.0
) -> tuple[httpx.Response, Any]:
	"""GET <origin>/json/version for an endpoint and return the response with its decoded JSON body."""
	url = http_origin(endpoint) + VERSION_PATH
	async with httpx.AsyncClient(timeout=timeout) as client:
		response = await client.get(url, headers=headers or {})
		logger.debug(f'Raw version info from {url}: {response}')
		if not response.is_success:
			return response, None
		return response, response.json()


class GatewayClient:
	"""Client for the gateway discovery handshake."""

	def __init__(self, timeout: float = 10.0):
		self.timeout = timeout

	async def discover(self, endpoint: str, token: str | None = None) -> GatewayVersionResponse:
		"""Query the gateway for its DevTools endpoint.

		Args:
			endpoint: The configured gateway address (ws, wss, http or https)
			token: Optional token, sent as a bearer credential and re-attached to the discovered URL

		Returns:
			GatewayVersionResponse: The discovered endpoint and the reported browser identity

		Raises:
			GatewayHandshakeError: On any transport failure or malformed response
		"""
		headers = {'Authorization': f'Bearer {token}'} if token else {}

		try:
			logger.debug(f'Discovering DevTools endpoint via gateway {http_origin(endpoint)}{VERSION_PATH}')
			response, data = await fetch_version_info(endpoint, headers=headers, timeout=self.timeout)

			if response.status_code in (401, 403):
				raise GatewayHandshakeError(f'Gateway rejected the credentials: HTTP {response.status_code}')
			elif not response.is_success:
				raise GatewayHandshakeError(f'Gateway discovery failed: HTTP {response.status_code}')

			version = GatewayVersionResponse.model_validate(data)

		except httpx.TimeoutException as e:
			raise GatewayHandshakeError(f'Timeout while querying gateway discovery endpoint: {e}') from e
		except httpx.HTTPError as e:
			raise GatewayHandshakeError(f'Failed to reach gateway discovery endpoint: {e}') from e
		except ValidationError as e:
			raise GatewayHandshakeError(f'Malformed gateway discovery response: {e}') from e
		except ValueError as e:
			# invalid endpoint scheme or a body that is not JSON
			raise GatewayHandshakeError(f'Gateway discovery failed: {e}') from e

		if token:
			version = version.model_copy(update={'webSocketDebuggerUrl': with_token(version.webSocketDebuggerUrl, token)})

		logger.info(f'🔗 Gateway handshake complete, browser reports {version.browser}')
		return version
