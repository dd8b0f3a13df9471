import logging


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
	"""Configure root logging for the tracker processes."""

	logging.basicConfig(
		level=getattr(logging, level, logging.INFO),
		format=LOG_FORMAT,
	)
