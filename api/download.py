from http.server import BaseHTTPRequestHandler

from mediaframe.config import configure_logging
from mediaframe.pipeline import serve_download

configure_logging()


class handler(BaseHTTPRequestHandler):
    """GET /download?url=<file>: stream small files as attachments, redirect large ones."""

    def do_GET(self):
        serve_download(self)
