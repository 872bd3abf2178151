"""
Small reply helpers for BaseHTTPRequestHandler based endpoints.
"""

from urllib.parse import parse_qs, urlparse

from requests.utils import requote_uri


def query_param(path, name):
    query = parse_qs(urlparse(path).query)
    return query.get(name, [None])[0]


def send_text(request, status, message):
    body = message.encode('utf-8')
    request.send_response(status)
    request.send_header('Content-Type', 'text/plain; charset=utf-8')
    request.send_header('Content-Length', str(len(body)))
    request.end_headers()
    request.wfile.write(body)


def send_redirect(request, location):
    request.send_response(302)
    request.send_header('Location', requote_uri(location))
    request.send_header('Content-Length', '0')
    request.end_headers()


def send_html(request, html):
    # No X-Frame-Options or Content-Security-Policy: the page is meant to be framed
    body = html.encode('utf-8')
    request.send_response(200)
    request.send_header('Content-Type', 'text/html; charset=utf-8')
    request.send_header('Content-Length', str(len(body)))
    request.end_headers()
    request.wfile.write(body)
