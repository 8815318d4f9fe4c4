import logging
import sys

CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'


def configure_logging(level: str = 'INFO') -> None:
	"""Send application logs to stdout. Safe to call more than once."""
	root_logger = logging.getLogger()
	root_logger.handlers.clear()
	root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

	console_handler = logging.StreamHandler(sys.stdout)
	console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
	root_logger.addHandler(console_handler)

	logging.getLogger('httpx').setLevel(logging.WARNING)
