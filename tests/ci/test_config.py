import io
import logging

import pytest

from remote_prerender.config import CONFIG
from remote_prerender.logging_config import setup_logging


def test_defaults():
	assert CONFIG.BROWSER_WS_ENDPOINT is None
	assert CONFIG.REMOTE_PRERENDER_CONNECT_TIMEOUT == 20.0
	assert CONFIG.REMOTE_PRERENDER_DIAL_ATTEMPTS == 5
	assert CONFIG.REMOTE_PRERENDER_DIAL_DELAY == 0.5
	assert CONFIG.REMOTE_PRERENDER_HTTP_TIMEOUT == 10.0


def test_values_are_read_lazily(monkeypatch):
	monkeypatch.setenv('BROWSER_WS_ENDPOINT', 'wss://gateway.example/?token=abc')
	monkeypatch.setenv('REMOTE_PRERENDER_DIAL_ATTEMPTS', '2')
	monkeypatch.setenv('REMOTE_PRERENDER_DIAL_DELAY', '1.25')

	assert CONFIG.BROWSER_WS_ENDPOINT == 'wss://gateway.example/?token=abc'
	assert CONFIG.REMOTE_PRERENDER_DIAL_ATTEMPTS == 2
	assert CONFIG.REMOTE_PRERENDER_DIAL_DELAY == 1.25


@pytest.mark.parametrize(
	'env_var, raw_value, expected',
	[
		('REMOTE_PRERENDER_CONNECT_TIMEOUT', 'soon', 20.0),
		('REMOTE_PRERENDER_CONNECT_TIMEOUT', '-1', 20.0),
		('REMOTE_PRERENDER_DIAL_ATTEMPTS', '0', 5),
		('REMOTE_PRERENDER_DIAL_ATTEMPTS', 'many', 5),
	],
)
def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog, env_var, raw_value, expected):
	monkeypatch.setenv(env_var, raw_value)

	with caplog.at_level(logging.WARNING, logger='remote_prerender.config'):
		assert getattr(CONFIG, env_var) == expected

	assert env_var in caplog.text


def test_setup_logging_writes_to_stream():
	root_logger = logging.getLogger()
	saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
	stream = io.StringIO()
	try:
		package_logger = setup_logging(stream=stream, log_level='debug', force_setup=True)
		logging.getLogger('remote_prerender.browser.driver').info('connected')

		assert package_logger.name == 'remote_prerender'
		assert package_logger.level == logging.DEBUG
		assert 'INFO     [remote_prerender.browser.driver] connected' in stream.getvalue()
	finally:
		root_logger.handlers = saved_handlers
		root_logger.setLevel(saved_level)
		logging.getLogger('remote_prerender').propagate = True
		logging.getLogger('remote_prerender').handlers = []


def test_setup_logging_applies_cdp_level(monkeypatch):
	monkeypatch.setenv('CDP_LOGGING_LEVEL', 'error')
	root_logger = logging.getLogger()
	saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
	cdp_logger_names = ('websockets.client', 'cdp_use', 'cdp_use.client', 'cdp_use.cdp.registry')
	saved_cdp = {name: (logging.getLogger(name).level, logging.getLogger(name).propagate) for name in cdp_logger_names}
	try:
		setup_logging(stream=io.StringIO(), log_level='debug', force_setup=True)

		for name in cdp_logger_names:
			cdp_logger = logging.getLogger(name)
			assert cdp_logger.level == logging.ERROR
			assert cdp_logger.propagate is False
			assert len(cdp_logger.handlers) == 1
	finally:
		root_logger.handlers = saved_handlers
		root_logger.setLevel(saved_level)
		for name, (level, propagate) in saved_cdp.items():
			cdp_logger = logging.getLogger(name)
			cdp_logger.setLevel(level)
			cdp_logger.propagate = propagate
			cdp_logger.handlers = []
		for name in ('remote_prerender', 'bubus'):
			logging.getLogger(name).propagate = True
			logging.getLogger(name).handlers = []
