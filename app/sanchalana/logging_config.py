"""
Logging setup for the Sanchalana backend.
"""
import logging

from sanchalana.constant_file import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once; later calls only adjust the level"""
    root = logging.getLogger()
    resolved = getattr(logging, str(level).upper(), logging.INFO)
    if not root.handlers:
        logging.basicConfig(level=resolved, format=LOG_FORMAT)
    root.setLevel(resolved)
