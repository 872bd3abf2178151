"""
Error taxonomy shared by both pipelines.

Every error carries the HTTP status and the short client-facing message it maps
to. Details (hosts, upstream exceptions) stay in the exception text and logs.
"""


class ProxyError(Exception):
    status = 500
    public_message = 'Internal error'


class InputError(ProxyError):
    status = 400
    public_message = 'Invalid request'


class InvalidURL(InputError):
    public_message = 'Invalid URL'


class ForbiddenHost(ProxyError):
    status = 400
    public_message = 'Local addresses not allowed'


class UpstreamFetchError(ProxyError):
    """Network failure, timeout or unreadable response from the origin."""
    status = 500
    public_message = 'Upstream fetch failed'


class UpstreamStatusError(UpstreamFetchError):
    """The origin answered, but not with a success status."""
    status = 502
    public_message = 'Failed to fetch file'

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code
