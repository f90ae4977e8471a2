"""
Parser for RFC 6570 URI Templates.

Each rule is a small function taking the template text and the current
position, returning a tuple of (value, new position). Optional rules return
None in place of the value when they do not match; once a rule has committed
(eg, after an opening brace) any mismatch raises TemplateSyntaxError at the
offending column. There is no recovery: a template either parses wholly or
fails.
"""
import logging

from uritmpl import charsets
from uritmpl import constants
from uritmpl import operators
from uritmpl.exceptions import TemplateSyntaxError
from uritmpl.nodes import Explode, Expression, Literal, Prefix, Template, VariableSpec

logger = logging.getLogger(__name__)


def parse(text):
    """
    Parses the template text into a Template.

    :raise TemplateSyntaxError: at the first column that cannot be matched
    :param str  text:
    :rtype: Template
    """
    if not isinstance(text, str):
        raise TypeError('Cannot parse unsupported datatype: {}'.format(type(text)))
    try:
        return parse_template(text, 0)[0]
    except TemplateSyntaxError as e:
        logger.debug('Failed to parse template %r: %s', text, e)
        raise


def parse_template(text, pos):
    """ Template ::= Part* """
    parts = []
    while pos < len(text):
        part, pos = parse_part(text, pos)
        parts.append(part)
    return Template(parts), pos


def parse_part(text, pos):
    """ Part ::= Expression | Literal """
    expression, end = parse_expression(text, pos)
    if expression is not None:
        return expression, end
    literal, end = parse_literal(text, pos)
    if literal is not None:
        return literal, end
    raise _error(text, pos, 'literal or expression')


def parse_literal(text, pos):
    """ Literal ::= literal-char+ """
    run, end = take_while(text, pos, charsets.is_literal)
    if not run:
        return None, pos
    return Literal(run), end


def parse_expression(text, pos):
    """ Expression ::= '{' Operator? VariableList '}' """
    start, pos = expect(text, pos, constants.EXPRESSION_START, optional=True)
    if start is None:
        return None, pos
    if text.find(constants.EXPRESSION_END, pos) == -1:
        raise TemplateSyntaxError(
            'Unclosed expression at column {}'.format(pos - 1),
            pos - 1, constants.EXPRESSION_START
        )
    operator, pos = parse_operator(text, pos)
    variables, pos = parse_variable_list(text, pos)
    _, pos = expect(text, pos, constants.EXPRESSION_END)
    return Expression(variables, operator=operator), pos


def parse_operator(text, pos):
    """ Operator ::= Level2 | Level3 | Reserved """
    for _tier, candidates in operators.OPERATOR_TIERS:
        for operator in candidates:
            if text.startswith(operator.symbol, pos):
                return operator, pos + len(operator.symbol)
    return None, pos


def parse_variable_list(text, pos):
    """ VariableList ::= VariableSpec (',' VariableSpec)* """
    variable, pos = parse_variable_spec(text, pos)
    variables = [variable]
    while True:
        separator, pos = expect(text, pos, constants.VARIABLE_SEPARATOR, optional=True)
        if separator is None:
            return variables, pos
        variable, pos = parse_variable_spec(text, pos)
        variables.append(variable)


def parse_variable_spec(text, pos):
    """ VariableSpec ::= VariableName Modifier? """
    name, pos = parse_variable_name(text, pos)
    modifier, pos = parse_modifier(text, pos)
    return VariableSpec(name, modifier), pos


def parse_variable_name(text, pos):
    """ VariableName ::= varchar+ ('.' varchar+)* """
    start = pos
    segment, pos = take_while(text, pos, charsets.is_varchar)
    if not segment:
        raise _error(text, pos, 'variable name')
    while True:
        dot, pos = expect(text, pos, constants.NAME_SEPARATOR, optional=True)
        if dot is None:
            return text[start:pos], pos
        segment, pos = take_while(text, pos, charsets.is_varchar)
        if not segment:
            raise _error(text, pos, 'variable name')


def parse_modifier(text, pos):
    """ Modifier ::= ':' max-length | '*' """
    explode, pos = expect(text, pos, constants.EXPLODE_MODIFIER, optional=True)
    if explode is not None:
        return Explode(), pos
    prefix, pos = expect(text, pos, constants.PREFIX_MODIFIER, optional=True)
    if prefix is None:
        return None, pos
    length, pos = parse_max_length(text, pos)
    return Prefix(length), pos


def parse_max_length(text, pos):
    """ max-length ::= %x31-39 DIGIT* """
    if pos >= len(text) or text[pos] not in constants.DIGITS or text[pos] == '0':
        raise _error(text, pos, 'prefix length')
    digits, pos = take_while(text, pos, lambda c: c in constants.DIGITS)
    return int(digits), pos


def take_while(text, pos, predicate):
    """
    Consumes the longest run of characters matching the predicate

    :param str      text:
    :param int      pos:
    :param callable predicate:
    :rtype: tuple[str, int]
    """
    end = pos
    while end < len(text) and predicate(text[end]):
        end += 1
    return text[pos:end], end


def expect(text, pos, char, optional=False):
    """
    Consumes a single expected character.

    :raise TemplateSyntaxError: if the character doesn't match and is not optional
    :param str  text:
    :param int  pos:
    :param str  char:
    :param bool optional: Return None instead of raising on a mismatch
    :rtype: tuple[str|None, int]
    """
    if text.startswith(char, pos):
        return char, pos + 1
    if optional:
        return None, pos
    raise _error(text, pos, repr(char))


def _error(text, pos, expected):
    if pos >= len(text):
        return TemplateSyntaxError(
            'Unexpected end of input at column {}, expected {}'.format(pos, expected),
            pos
        )
    return TemplateSyntaxError(
        'Unexpected character {!r} at column {}, expected {}'.format(text[pos], pos, expected),
        pos, text[pos]
    )
