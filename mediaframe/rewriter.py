"""
HTML Rewriter: absolutizes resource references and appends the media probe.

Rewriting is best effort. A reference that cannot be resolved keeps its
original value, and markup the parser refuses is passed through untouched.
"""

import logging
import re

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from mediaframe.probe import PROBE_SCRIPT

logger = logging.getLogger(__name__)

# (tag, attribute) pairs whose values are resolved against the page URL
REWRITE_TARGETS = (
    ('a', 'href'),
    ('img', 'src'),
    ('script', 'src'),
    ('link', 'href'),
    ('video', 'src'),
    ('source', 'src'),
)

SKIP_PATTERN = re.compile(r'^(data:|mailto:|javascript:|#)', re.IGNORECASE)


def should_skip(value):
    return not value or bool(SKIP_PATTERN.match(value))


def absolutize(soup, base):
    """Rewrite every supported reference in ``soup`` in place. Returns the count."""
    rewritten = 0
    for tag_name, attr in REWRITE_TARGETS:
        for el in soup.find_all(tag_name):
            value = el.get(attr)
            if not isinstance(value, str) or should_skip(value):
                continue
            try:
                absolute = base.resolve(value)
            except ValueError:
                logger.debug(f"Leaving unresolvable {tag_name}[{attr}]={value!r}")
                continue
            if absolute != value:
                el[attr] = absolute
                rewritten += 1
    return rewritten


def inject_probe(soup):
    """Append the probe script as the last child of <body>. No body, no probe."""
    body = soup.body
    if body is None:
        return False
    script = soup.new_tag('script')
    script.string = PROBE_SCRIPT
    body.append(script)
    return True


def rewrite(html, base):
    """Rewrite ``html`` (text, or bytes whose encoding BeautifulSoup detects) to a str."""
    try:
        soup = BeautifulSoup(html, 'html.parser')
    except ParserRejectedMarkup as e:
        logger.warning(f"Parser rejected markup from {base.url}, serving it unmodified: {e}")
        if isinstance(html, bytes):
            return html.decode('utf-8', errors='replace')
        return html

    count = absolutize(soup, base)
    injected = inject_probe(soup)
    logger.debug(f"Rewrote {count} references on {base.url}, probe injected: {injected}")
    return str(soup)
