#!/usr/bin/env python3
"""
Local development server serving both endpoints from one process.

    mediaframe-dev --port 8000
    curl 'http://127.0.0.1:8000/proxy?url=https%3A%2F%2Fexample.com%2F'

Deployed, each endpoint runs as its own function under api/.
"""

import argparse
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import urlsplit

from mediaframe.config import configure_logging
from mediaframe.pipeline import serve_download, serve_page
from mediaframe.replies import send_text

logger = logging.getLogger(__name__)

ROUTES = {
    '/proxy': serve_page,
    '/api/proxy': serve_page,
    '/download': serve_download,
    '/api/download': serve_download,
}


class DevHandler(BaseHTTPRequestHandler):

    def do_GET(self):
        path = urlsplit(self.path).path
        if path == '/health':
            return send_text(self, 200, 'ok')
        route = ROUTES.get(path)
        if route is None:
            return send_text(self, 404, 'Not found')
        route(self)

    def log_message(self, format, *args):
        """Route the access log through our logger."""
        logger.info(f"{self.address_string()} - {format % args}")


def make_server(host='127.0.0.1', port=8000):
    return ThreadingHTTPServer((host, port), DevHandler)


def main():
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument('--bind', default='127.0.0.1')
    ap.add_argument('--port', type=int, default=8000)
    args = ap.parse_args()

    configure_logging()
    with make_server(args.bind, args.port) as httpd:
        logger.info(f"Dev server listening on http://{args.bind}:{args.port}")
        logger.info("  page    : /proxy?url=...")
        logger.info("  download: /download?url=...")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down dev server...")


if __name__ == '__main__':
    main()
