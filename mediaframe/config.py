"""
Runtime settings, read once from the environment.
"""

import logging
import os


def _flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


USER_AGENT = os.getenv('MEDIAFRAME_USER_AGENT', 'Mozilla/5.0 (compatible; MediaFrameProxy/1.0)')
FETCH_TIMEOUT = float(os.getenv('MEDIAFRAME_FETCH_TIMEOUT', 20))

# Larger files are sent straight to the origin instead of through the function
REDIRECT_THRESHOLD = int(os.getenv('MEDIAFRAME_REDIRECT_THRESHOLD', 30 * 1024 * 1024))
CHUNK_SIZE = int(os.getenv('MEDIAFRAME_CHUNK_SIZE', 8192))

BLOCK_PRIVATE_NETWORKS = _flag('MEDIAFRAME_BLOCK_PRIVATE_NETWORKS')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()


def configure_logging(level=None):
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
