from remote_prerender.browser.gateway.gateway import GatewayClient, http_origin, redact_token, with_token
from remote_prerender.browser.gateway.views import GatewayHandshakeError, GatewayVersionResponse

__all__ = ['GatewayClient', 'GatewayHandshakeError', 'GatewayVersionResponse', 'http_origin', 'redact_token', 'with_token']
