from pydantic import BaseModel, ConfigDict, Field

from remote_prerender.browser.views import DEFAULT_BROWSER_VERSION, DEFAULT_USER_AGENT, RemoteBrowserError

# Well-known DevTools discovery path served by Chromium and by managed gateways
VERSION_PATH = '/json/version'
TOKEN_PARAM = 'token'


# Responses
class GatewayVersionResponse(BaseModel):
	"""Response from the /json/version discovery endpoint."""

	model_config = ConfigDict(extra='ignore', populate_by_name=True)

	webSocketDebuggerUrl: str = Field(alias='webSocketDebuggerUrl', min_length=1)
	browser: str = Field(alias='Browser', default=DEFAULT_BROWSER_VERSION)
	user_agent: str = Field(alias='User-Agent', default=DEFAULT_USER_AGENT)
	protocol_version: str | None = Field(alias='Protocol-Version', default=None)


# Errors
class GatewayHandshakeError(RemoteBrowserError):
	"""Exception raised when the gateway discovery handshake fails."""

	pass
