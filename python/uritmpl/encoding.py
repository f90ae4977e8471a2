import re
from urllib.parse import quote

from uritmpl import constants

PATTERN_PCT_ENCODED = re.compile('%[0-9A-Fa-f]{2}')

_RESERVED_SAFE = ''.join(sorted(constants.RESERVED))


def encode(value, allow_reserved=False):
    """
    Percent-encodes the UTF-8 bytes of every character not allowed through.
    Unreserved characters are never encoded.

    :param str  value:
    :param bool allow_reserved: Whether reserved characters and existing
                                pct-encoded triplets are left untouched
    :rtype: str
    """
    if not allow_reserved:
        return quote(value, safe='')

    # Triplets are copied as-is, only the text between them is encoded
    segments = []
    last_idx = 0
    for match in PATTERN_PCT_ENCODED.finditer(value):
        start, end = match.span()
        segments.append(quote(value[last_idx:start], safe=_RESERVED_SAFE))
        segments.append(match.group(0))
        last_idx = end
    segments.append(quote(value[last_idx:], safe=_RESERVED_SAFE))
    return ''.join(segments)
