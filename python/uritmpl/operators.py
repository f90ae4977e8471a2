from uritmpl.exceptions import TemplateValidationError


class Tier(object):
    Level2 = 'level2'
    Level3 = 'level3'
    Reserved = 'reserved'


class Operator(object):
    """
    Expression operator and the parameters that drive its expansion, see
    RFC 6570 Appendix A.
    """

    def __init__(self, symbol, tier, first='', separator=',', named=False,
                 ifemp='', allow_reserved=False):
        """
        :param str  symbol:         Single character written after '{'
        :param str  tier:           One of the Tier values
        :param str  first:          Emitted once before the first defined value
        :param str  separator:      Joins each defined value
        :param bool named:          Whether values are written as name=value
        :param str  ifemp:          Written after the name for empty values
        :param bool allow_reserved: Whether reserved characters pass unencoded
        """
        self._symbol = symbol
        self._tier = tier
        self._first = first
        self._separator = separator
        self._named = named
        self._ifemp = ifemp
        self._allow_reserved = allow_reserved

    def __repr__(self):
        return 'get_operator({!r})'.format(self._symbol)

    def __str__(self):
        return self._symbol

    def __eq__(self, other):
        return isinstance(other, Operator) and other.symbol == self._symbol

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self._symbol)

    @property
    def allow_reserved(self):
        # type: () -> bool
        return self._allow_reserved

    @property
    def first(self):
        # type: () -> str
        return self._first

    @property
    def ifemp(self):
        # type: () -> str
        return self._ifemp

    @property
    def named(self):
        # type: () -> bool
        return self._named

    @property
    def reserved(self):
        """
        Whether the operator is reserved for future extensions and so can be
        parsed but never expanded.

        :rtype: bool
        """
        return self._tier == Tier.Reserved

    @property
    def separator(self):
        # type: () -> str
        return self._separator

    @property
    def symbol(self):
        # type: () -> str
        return self._symbol

    @property
    def tier(self):
        # type: () -> str
        return self._tier

    def format(self):
        return self._symbol


PLUS = Operator('+', Tier.Level2, allow_reserved=True)
HASH = Operator('#', Tier.Level2, first='#', allow_reserved=True)

DOT = Operator('.', Tier.Level3, first='.', separator='.')
SLASH = Operator('/', Tier.Level3, first='/', separator='/')
SEMICOLON = Operator(';', Tier.Level3, first=';', separator=';', named=True)
QUESTION = Operator('?', Tier.Level3, first='?', separator='&', named=True, ifemp='=')
AMPERSAND = Operator('&', Tier.Level3, first='&', separator='&', named=True, ifemp='=')

EQUALS = Operator('=', Tier.Reserved)
COMMA = Operator(',', Tier.Reserved)
EXCLAMATION = Operator('!', Tier.Reserved)
AT = Operator('@', Tier.Reserved)
PIPE = Operator('|', Tier.Reserved)

# Expansion parameters of an expression without an operator
SIMPLE = Operator('', None)

# Tiers are tried in order; their leading characters never overlap
OPERATOR_TIERS = (
    (Tier.Level2, (PLUS, HASH)),
    (Tier.Level3, (DOT, SLASH, SEMICOLON, QUESTION, AMPERSAND)),
    (Tier.Reserved, (EQUALS, COMMA, EXCLAMATION, AT, PIPE)),
)

OPERATORS = {op.symbol: op for _, tier in OPERATOR_TIERS for op in tier}


def get_operator(symbol):
    """
    :raise TemplateValidationError: if the symbol is not an operator
    :param str  symbol:
    :rtype: Operator
    """
    try:
        return OPERATORS[symbol]
    except KeyError:
        raise TemplateValidationError('Unknown operator: {!r}'.format(symbol))


def is_operator(char):
    """
    :param str  char:
    :rtype: bool
    """
    return char in OPERATORS
