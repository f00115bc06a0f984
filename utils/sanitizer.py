"""
Input Sanitization Module

Cleans free text and URLs submitted by clients before they are stored.
Output escaping is left to the frontends, so text is stored as typed.
"""

import re
from urllib.parse import urlparse

# Control characters except tab, newline and carriage return
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')


def sanitize_text(text, max_length=10000):
    """
    Sanitize multi-line text (descriptions, notes, instructions).

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string with control characters removed and surrounding
        whitespace stripped, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    text = _CONTROL_CHARS.sub('', text)
    text = text.strip()

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_line(text, max_length=200):
    """
    Sanitize a single-line value such as a title, username or unit.

    Newlines and runs of whitespace collapse to single spaces.
    """
    text = sanitize_text(text, max_length=max_length * 2)
    text = re.sub(r'\s+', ' ', text)
    return text[:max_length]


def sanitize_url(url):
    """
    Sanitize a URL by rejecting dangerous schemes.

    Prevents javascript:, data:, vbscript:, and other dangerous URL schemes
    that could execute code when used in href or src attributes.

    Args:
        url: The URL to validate (can be None)

    Returns:
        The URL if safe, empty string if unsafe or invalid
    """
    if not url:
        return ''

    if not isinstance(url, str):
        return ''

    url = url.strip()

    dangerous_schemes = {
        'javascript', 'data', 'vbscript', 'file',
        'blob', 'about', 'chrome', 'moz-extension'
    }

    try:
        parsed = urlparse(url)
    except ValueError:
        return ''

    scheme = parsed.scheme.lower()

    # Only allow http and https (or scheme-less relative paths)
    if scheme and scheme not in ('http', 'https'):
        return ''

    url_lower = url.lower()
    for dangerous in dangerous_schemes:
        if dangerous + ':' in url_lower:
            return ''
        # URL-encoded versions
        if dangerous.replace('a', '%61') in url_lower:
            return ''

    return url
