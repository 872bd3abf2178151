"""
Origin Fetcher: the only place that talks to remote servers.

Every requests exception is converted to UpstreamFetchError here so callers
deal with a single failure type.
"""

import logging

import requests

from mediaframe import config
from mediaframe.errors import UpstreamFetchError

logger = logging.getLogger(__name__)


def default_headers():
    return {
        'User-Agent': config.USER_AGENT,
        'Accept': '*/*',
    }


class OriginResponse:
    """Status, headers and body of one origin response.

    ``streamed`` tells whether the body is still on the wire (read it with
    iter_chunks) or was already loaded by requests.
    """

    def __init__(self, response, streamed):
        self._response = response
        self.streamed = streamed

    @property
    def status_code(self):
        return self._response.status_code

    @property
    def headers(self):
        # requests.structures.CaseInsensitiveDict
        return self._response.headers

    @property
    def url(self):
        return self._response.url

    @property
    def content_type(self):
        return self._response.headers.get('Content-Type', '')

    @property
    def charset(self):
        """Charset named in the Content-Type header, or None."""
        for param in self.content_type.split(';')[1:]:
            key, _, value = param.partition('=')
            if key.strip().lower() == 'charset':
                return value.strip().strip('"\'') or None
        return None

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def text(self):
        try:
            return self._response.text
        except requests.RequestException as e:
            raise UpstreamFetchError(f'reading body of {self.url} failed: {e}') from e

    def read(self):
        try:
            return self._response.content
        except requests.RequestException as e:
            raise UpstreamFetchError(f'reading body of {self.url} failed: {e}') from e

    def iter_chunks(self, chunk_size=None):
        # Errors raised mid-iteration are left to the consumer, which may
        # already have sent headers.
        for chunk in self._response.iter_content(chunk_size=chunk_size or config.CHUNK_SIZE):
            if chunk:
                yield chunk

    def close(self):
        self._response.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def fetch(url, method='GET', follow_redirects=True, stream=False, headers=None, timeout=None):
    """Send one request to the origin and wrap the answer.

    Redirects are followed up to the requests default limit. No retries.
    """
    request_headers = default_headers()
    if headers:
        request_headers.update(headers)

    logger.info(f"Fetching {method} {url}")
    try:
        response = requests.request(
            method,
            url,
            headers=request_headers,
            allow_redirects=follow_redirects,
            stream=stream,
            timeout=timeout or config.FETCH_TIMEOUT,
        )
    except requests.RequestException as e:
        raise UpstreamFetchError(f'{method} {url} failed: {e}') from e

    logger.info(f"Origin answered {response.status_code} for {method} {url}")
    return OriginResponse(response, streamed=stream)
