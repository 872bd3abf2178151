import pytest

from mediaframe.errors import ForbiddenHost, InvalidURL
from mediaframe.guard import is_forbidden_host, validate


@pytest.mark.parametrize('url', [
    'http://localhost/',
    'https://localhost:8443/admin',
    'http://127.0.0.1/',
    'ftp://127.0.0.1/file',
    'http://192.168.0.1/router',
    'https://192.168.254.12:8080/x?y=1',
    'http://metadata.internal/computeMetadata',
    'https://db.corp.internal/',
    'http://LOCALHOST/',
])
def test_rejects_internal_hosts(url):
    # ftp is refused as a scheme first; everything else hits the denylist
    with pytest.raises((ForbiddenHost, InvalidURL)):
        validate(url)


@pytest.mark.parametrize('url', [
    'http://localhost/',
    'https://127.0.0.1/a/b',
    'http://192.168.1.1/',
    'https://svc.internal/path',
])
def test_internal_hosts_are_forbidden_not_invalid(url):
    with pytest.raises(ForbiddenHost):
        validate(url)


@pytest.mark.parametrize('url', [
    'https://example.com/page.html',
    'http://example.com',
    'https://cdn.example.org/video.mp4?token=abc',
    'https://8.8.8.8/',
    'http://10.0.0.1/',
    'http://internal.example.com/',
])
def test_accepts_public_urls(url):
    guarded = validate(url)
    assert guarded.url == url
    assert guarded.scheme in ('http', 'https')


def test_guarded_url_fields():
    guarded = validate('  HTTPS://Example.COM/a/b?c=d  ')
    assert guarded.url == 'HTTPS://Example.COM/a/b?c=d'
    assert guarded.scheme == 'https'
    assert guarded.host == 'example.com'
    assert guarded.path == '/a/b'


@pytest.mark.parametrize('raw', [
    None,
    '',
    '   ',
    'not a url',
    '/relative/path',
    'example.com/page',
    'javascript:alert(1)',
    'http://',
    'http://example.com:notaport/',
    'http://[::1/',
])
def test_rejects_malformed(raw):
    with pytest.raises(InvalidURL):
        validate(raw)


def test_narrow_denylist_lets_other_private_ranges_through():
    assert not is_forbidden_host('10.1.2.3')
    assert not is_forbidden_host('169.254.169.254')
    assert not is_forbidden_host('localhost.')


@pytest.mark.parametrize('host', [
    '10.1.2.3',
    '172.16.0.9',
    '169.254.169.254',
    '0.0.0.0',
    '::1',
    'localhost.',
    'app.localhost',
])
def test_private_network_blocking(host):
    assert is_forbidden_host(host, block_private_networks=True)
    with pytest.raises(ForbiddenHost):
        validate(f'http://{"[" + host + "]" if ":" in host else host}/', block_private_networks=True)


def test_private_network_blocking_keeps_public_hosts():
    assert not is_forbidden_host('93.184.216.34', block_private_networks=True)
    assert not is_forbidden_host('example.com', block_private_networks=True)
