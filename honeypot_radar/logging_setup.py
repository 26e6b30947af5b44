import logging
import sys


def setup_logging(level: int = logging.INFO):
    """
    Console logging for the entry points (cli, batch_cli, api).

    Library modules only create loggers; they never configure handlers.
    """
    fmt = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    handlers = [logging.StreamHandler(sys.stderr)]
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)
