"""
The two request pipelines, each driven by a BaseHTTPRequestHandler instance.

Page:     guard -> fetch -> (HTML?) rewrite -> 200 | (not HTML) 302 to origin
Download: guard -> HEAD -> redirect | GET -> relay

Input and host errors are answered before any outbound request. Everything
that fails later is logged and answered with a short generic message.
"""

import logging

from mediaframe.dispatcher import Redirect, decide, open_stream
from mediaframe.errors import ForbiddenHost, InvalidURL, UpstreamStatusError
from mediaframe.fetcher import fetch
from mediaframe.guard import validate
from mediaframe.replies import query_param, send_html, send_redirect, send_text
from mediaframe.rewriter import rewrite
from mediaframe.streamer import relay

logger = logging.getLogger(__name__)


def is_html(content_type):
    return content_type.strip().lower().startswith('text/html')


def _guard(request, raw, missing_message):
    """Validate ``raw`` or answer the client. Returns None when already answered."""
    if not raw:
        send_text(request, 400, missing_message)
        return None
    try:
        return validate(raw)
    except InvalidURL as e:
        logger.info(f"Rejected target: {e}")
        send_text(request, e.status, e.public_message)
    except ForbiddenHost as e:
        logger.warning(f"Rejected target: {e}")
        send_text(request, e.status, e.public_message)
    return None


def serve_page(request):
    target = _guard(request, query_param(request.path, 'url'), 'Missing url query parameter')
    if target is None:
        return

    try:
        with fetch(target.url, stream=True) as origin:
            if not is_html(origin.content_type):
                logger.info(f"{target.url} is {origin.content_type or 'untyped'}, redirecting")
                send_redirect(request, target.url)
                return
            # Without a header charset requests falls back to ISO-8859-1; hand
            # BeautifulSoup the bytes so <meta charset> and sniffing decide.
            html = origin.text() if origin.charset else origin.read()
        page = rewrite(html, target)
    except Exception as e:
        logger.error(f"proxy error for {target.url}: {e}")
        send_text(request, 500, 'Proxy fetch error')
        return

    send_html(request, page)


def serve_download(request):
    target = _guard(request, query_param(request.path, 'url'), 'Missing url')
    if target is None:
        return

    try:
        decision = decide(target)
        if isinstance(decision, Redirect):
            send_redirect(request, decision.location)
            return
        with open_stream(target) as origin:
            relay(request, origin, decision)
    except UpstreamStatusError as e:
        logger.error(f"download error: {e}")
        send_text(request, e.status, e.public_message)
    except Exception as e:
        logger.error(f"download error for {target.url}: {e}")
        send_text(request, 500, 'Download error')
