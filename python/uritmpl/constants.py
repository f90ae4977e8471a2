import re
import string


def _char_range(start, end):
    return {chr(code) for code in range(start, end + 1)}


# RFC 6570 section 2.1, minus pct-encoded triplets and ucschar/iprivate
LITERAL_CHARS = frozenset(
    {chr(0x21)}
    | _char_range(0x23, 0x24)
    | {chr(0x26)}
    | _char_range(0x28, 0x3B)
    | {chr(0x3D)}
    | _char_range(0x3F, 0x5B)
    | {chr(0x5D)}
    | {chr(0x5F)}
    | _char_range(0x61, 0x7A)
    | {chr(0x7E)}
)

VARCHARS = frozenset(string.ascii_letters + string.digits + '_')
DIGITS = frozenset(string.digits)

UNRESERVED = frozenset(string.ascii_letters + string.digits + '-._~')
GEN_DELIMS = frozenset(':/?#[]@')
SUB_DELIMS = frozenset("!$&'()*+,;=")
RESERVED = GEN_DELIMS | SUB_DELIMS

EXPRESSION_START = '{'
EXPRESSION_END = '}'
VARIABLE_SEPARATOR = ','
NAME_SEPARATOR = '.'
PREFIX_MODIFIER = ':'
EXPLODE_MODIFIER = '*'

# max-length = %x31-39 0*3DIGIT
MAX_PREFIX_LENGTH = 9999

ENV_VAR = 'URITMPL_CONFIG'
KEY_TEMPLATE = 'templates'

# '<' and '>' are outside LITERAL_CHARS
PATTERN_REFERENCE = re.compile(r'<([\w.]+)>')
