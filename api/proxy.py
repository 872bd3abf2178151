from http.server import BaseHTTPRequestHandler

from mediaframe.config import configure_logging
from mediaframe.pipeline import serve_page

configure_logging()


class handler(BaseHTTPRequestHandler):
    """GET /proxy?url=<page>: fetch a page, absolutize its links, inject the media probe."""

    def do_GET(self):
        serve_page(self)
