"""
URL Guard: parses the client supplied target and refuses internal hosts.

The default denylist is a literal match on a handful of names. Setting
MEDIAFRAME_BLOCK_PRIVATE_NETWORKS widens it to every non-public IP literal.
No DNS lookups are made here, so a public name that resolves to a private
address is not caught.
"""

import ipaddress
from dataclasses import dataclass
from urllib.parse import urljoin, urlsplit

from mediaframe import config
from mediaframe.errors import ForbiddenHost, InvalidURL

ALLOWED_SCHEMES = ('http', 'https')


@dataclass(frozen=True)
class GuardedURL:
    url: str
    scheme: str
    host: str
    path: str

    def resolve(self, reference):
        """Resolve ``reference`` against this URL. Raises ValueError on garbage."""
        return urljoin(self.url, reference)


def _is_private_literal(host):
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return (ip.is_private or ip.is_loopback or ip.is_link_local or ip.is_reserved
            or ip.is_multicast or ip.is_unspecified)


def is_forbidden_host(host, block_private_networks=False):
    host = host.lower()
    if host in ('localhost', '127.0.0.1'):
        return True
    if host.startswith('192.168.') or host.endswith('.internal'):
        return True

    if block_private_networks:
        bare = host.rstrip('.')
        if bare == 'localhost' or bare.endswith('.localhost') or bare.endswith('.internal'):
            return True
        return _is_private_literal(bare)
    return False


def validate(raw, block_private_networks=None):
    """
    Turn a raw ``url`` parameter into a GuardedURL.

    Raises InvalidURL when the value is empty, is not an absolute http(s) URL
    or has no host, and ForbiddenHost when the host is on the denylist.
    """
    if block_private_networks is None:
        block_private_networks = config.BLOCK_PRIVATE_NETWORKS

    if not raw or not raw.strip():
        raise InvalidURL('empty url')
    url = raw.strip()

    try:
        parts = urlsplit(url)
        host = parts.hostname
        parts.port  # a malformed port only surfaces here
    except ValueError as e:
        raise InvalidURL(f'unparsable url {url!r}: {e}') from e

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not host:
        raise InvalidURL(f'not an absolute http(s) url: {url!r}')

    if is_forbidden_host(host, block_private_networks):
        raise ForbiddenHost(f'refusing internal host {host}')

    return GuardedURL(url=url, scheme=parts.scheme.lower(), host=host, path=parts.path or '/')
