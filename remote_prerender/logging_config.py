import logging
import sys

from remote_prerender.config import CONFIG

LOG_FORMAT = '%(levelname)-8s [%(name)s] %(message)s'


def setup_logging(stream=None, log_level=None, force_setup=False):
	"""Configure logging for remote_prerender.

	Args:
		stream: Output stream for logs (default: sys.stdout).
		log_level: Override for the log level (default: CONFIG.REMOTE_PRERENDER_LOGGING_LEVEL)
		force_setup: Force reconfiguration even if handlers already exist
	"""
	level_name = (log_level or CONFIG.REMOTE_PRERENDER_LOGGING_LEVEL).upper()
	effective_level = getattr(logging, level_name, logging.INFO)

	root_logger = logging.getLogger()
	if root_logger.hasHandlers() and not force_setup:
		return logging.getLogger('remote_prerender')

	root_logger.handlers = []

	console_handler = logging.StreamHandler(stream or sys.stdout)
	console_handler.setLevel(effective_level)
	console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

	root_logger.addHandler(console_handler)
	root_logger.setLevel(effective_level)

	package_logger = logging.getLogger('remote_prerender')
	package_logger.propagate = False
	package_logger.handlers = [console_handler]
	package_logger.setLevel(effective_level)

	bubus_logger = logging.getLogger('bubus')
	bubus_logger.propagate = False
	bubus_logger.handlers = [console_handler]
	bubus_logger.setLevel(effective_level)

	cdp_logging_level = getattr(logging, CONFIG.CDP_LOGGING_LEVEL.upper(), logging.WARNING)
	for cdp_logger_name in ('websockets.client', 'cdp_use', 'cdp_use.client', 'cdp_use.cdp.registry'):
		cdp_logger = logging.getLogger(cdp_logger_name)
		cdp_logger.setLevel(cdp_logging_level)
		cdp_logger.handlers = [console_handler]
		cdp_logger.propagate = False

	# httpx logs every request at INFO
	logging.getLogger('httpx').setLevel(logging.WARNING)
	logging.getLogger('httpcore').setLevel(logging.WARNING)

	package_logger.debug(f'Logging configured at level {level_name}')
	return package_logger
