"""
Response Streamer: relays an origin body to the client as an attachment.
"""

import logging
import re
from urllib.parse import quote

import requests

from mediaframe import config
from mediaframe.dispatcher import DEFAULT_CONTENT_TYPE
from mediaframe.errors import UpstreamFetchError

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\x00-\x1f\x7f"\\]')


def content_disposition(filename):
    safe = _UNSAFE_FILENAME_CHARS.sub('_', filename)
    try:
        safe.encode('latin-1')
        return f'attachment; filename="{safe}"'
    except UnicodeEncodeError:
        # http.server writes headers as latin-1
        fallback = safe.encode('ascii', 'replace').decode('ascii').replace('?', '_')
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(safe, safe='')}"


def relay(request, origin, decision, chunk_size=None):
    """
    Write ``origin`` to the client behind ``request`` (a BaseHTTPRequestHandler).

    Headers go out first, then the body chunk by chunk. A body that was already
    loaded into memory is written in one go. Returns the number of body bytes
    written; a dropped client or a failing origin ends the relay early.
    """
    content_type = origin.content_type or decision.content_type or DEFAULT_CONTENT_TYPE

    request.send_response(200)
    request.send_header('Content-Type', content_type)
    request.send_header('Content-Disposition', content_disposition(decision.filename))
    # Lengths of encoded bodies don't match what iter_content yields
    if 'Content-Length' in origin.headers and 'Content-Encoding' not in origin.headers:
        request.send_header('Content-Length', origin.headers['Content-Length'])
    request.end_headers()

    # Once headers are out failures can only be logged. RequestException is an
    # OSError too and must be matched first.
    sent = 0
    try:
        if origin.streamed:
            for chunk in origin.iter_chunks(chunk_size or config.CHUNK_SIZE):
                request.wfile.write(chunk)
                sent += len(chunk)
        else:
            body = origin.read()
            request.wfile.write(body)
            sent = len(body)
    except (requests.RequestException, UpstreamFetchError) as e:
        logger.error(f"Stream error after {sent} bytes of {origin.url}: {e}")
        origin.close()
    except OSError as e:
        logger.warning(f"Client went away after {sent} bytes of {origin.url}, aborting upstream: {e!r}")
        origin.close()
    else:
        logger.info(f"Relayed {sent} bytes from {origin.url}")
    return sent
