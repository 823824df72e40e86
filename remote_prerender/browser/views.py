from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7str

# Identity reported before any version query succeeds
DEFAULT_USER_AGENT = 'Chrome (via WebSocket)'
DEFAULT_BROWSER_VERSION = 'Remote Chrome'


class EndpointConfig(BaseModel):
	"""Address of the remote browser as supplied by the user.

	Args:
	    endpoint: ws://, wss://, http:// or https:// address of the browser or gateway
	    token: value of the `token` query parameter, if the endpoint carries one
	    source: where the endpoint came from (explicit option or environment)
	"""

	model_config = ConfigDict(frozen=True, extra='forbid')

	endpoint: str
	token: str | None = None
	source: Literal['option', 'environment'] = 'option'


class ResolvedEndpoint(BaseModel):
	"""The concrete DevTools endpoint to dial, plus the identity the browser reported."""

	model_config = ConfigDict(frozen=True, extra='forbid')

	ws_url: str
	mode: Literal['direct', 'gateway']
	user_agent: str = DEFAULT_USER_AGENT
	browser_version: str = DEFAULT_BROWSER_VERSION


class PrerenderJob(BaseModel):
	"""Request payload of one rendering job.

	The page-lifecycle driver mutates `errors`, `requests` and `num_requests_in_flight`
	while the page loads. Extra job options are kept as-is.
	"""

	model_config = ConfigDict(extra='allow', validate_assignment=False)

	id: str = Field(default_factory=uuid7str)
	url: str | None = None
	errors: list[Any] = Field(default_factory=list)
	requests: dict[str, Any] = Field(default_factory=dict)
	num_requests_in_flight: int = 0


class BootstrapState(str, Enum):
	IDLE = 'idle'
	RESOLVING = 'resolving'
	CREATING_CONTEXT = 'creating_context'
	DIALING_TARGET = 'dialing_target'
	ASSEMBLED = 'assembled'
	FAILED = 'failed'


# Errors
class RemoteBrowserError(Exception):
	"""Base class for remote browser driver errors."""

	pass


class ConfigurationError(RemoteBrowserError):
	"""Raised when the browser endpoint is missing or invalid."""

	pass


class ConnectTimeoutError(RemoteBrowserError, TimeoutError):
	"""Raised when endpoint resolution does not finish before the connect deadline."""

	pass


class NotConnectedError(RemoteBrowserError):
	"""Raised when a tab is requested before connect() has resolved the endpoint."""

	pass
