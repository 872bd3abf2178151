"""
Download Dispatcher: stream through this service or send the browser to the origin.

A HEAD request tells us the declared size. Anything above the threshold is
redirected, since relaying it would blow the function's time and memory budget.
"""

import logging
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from mediaframe import config
from mediaframe.errors import UpstreamStatusError
from mediaframe.fetcher import fetch

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = 'download'
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


@dataclass(frozen=True)
class Redirect:
    location: str


@dataclass(frozen=True)
class Stream:
    content_type: str
    filename: str


def derive_filename(url):
    try:
        last = urlsplit(url).path.split('/')[-1]
        if last:
            return unquote(last, errors='strict')
    except (ValueError, UnicodeDecodeError):
        pass
    return DEFAULT_FILENAME


def declared_length(headers):
    value = headers.get('Content-Length')
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def decide(target, threshold=None):
    """HEAD the target and pick Redirect or Stream.

    The HEAD status is not checked: origins that refuse HEAD still get a
    streaming attempt, which reports its own failure.
    """
    if threshold is None:
        threshold = config.REDIRECT_THRESHOLD

    with fetch(target.url, method='HEAD') as head:
        length = declared_length(head.headers)
        content_type = head.headers.get('Content-Type') or DEFAULT_CONTENT_TYPE

    if length is not None and length > threshold:
        logger.info(f"{target.url} declares {length} bytes, redirecting to origin")
        return Redirect(target.url)

    logger.info(f"Streaming {target.url} ({length if length is not None else 'unknown'} bytes)")
    return Stream(content_type=content_type, filename=derive_filename(target.url))


def open_stream(target):
    """Start the streaming GET. Raises UpstreamStatusError on a non-2xx answer."""
    origin = fetch(target.url, stream=True, headers={'Accept-Encoding': 'identity'})
    if not origin.ok:
        origin.close()
        raise UpstreamStatusError(
            f'GET {target.url} answered {origin.status_code}', status_code=origin.status_code
        )
    return origin
