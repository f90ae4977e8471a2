"""
Expansion of parsed templates, following RFC 6570 section 3.2 and the
algorithm of Appendix A.

Each expression is expanded by rendering its defined variables in order,
joining them with the operator's separator and prefixing the result with the
operator's first character. Undefined variables, including empty lists and
maps, contribute nothing.
"""
import logging

from uritmpl import constants
from uritmpl import operators
from uritmpl.data import Assoc, Atom, List, VariableContext
from uritmpl.encoding import encode
from uritmpl.exceptions import ExpansionError
from uritmpl.nodes import Literal

logger = logging.getLogger(__name__)


def expand(template, context):
    """
    :raise ExpansionError: if the template cannot be rendered with the variables
    :param Template                     template:
    :param VariableContext|dict         context:
    :rtype: str
    """
    context = VariableContext.from_dict(context)
    return ''.join(expand_part(part, context) for part in template.parts)


def expand_part(part, context):
    """
    :param Literal|Expression   part:
    :param VariableContext      context:
    :rtype: str
    """
    if isinstance(part, Literal):
        return part.text
    return expand_expression(part, context)


def expand_expression(expression, context):
    """
    :raise ExpansionError: if the operator is reserved, or any modifier is
        invalid for the value it is applied to
    :param Expression       expression:
    :param VariableContext  context:
    :rtype: str
    """
    operator = expression.operator or operators.SIMPLE
    if operator.reserved:
        raise ExpansionError('Operator {!r} is reserved and cannot be expanded: {}'.format(
            operator.symbol, expression
        ))
    for variable in expression.variables:
        if variable.prefix is not None and variable.prefix > constants.MAX_PREFIX_LENGTH:
            raise ExpansionError('Prefix length for {!r} exceeds {}: {}'.format(
                variable.name, constants.MAX_PREFIX_LENGTH, variable.prefix
            ))

    values = []
    for variable in expression.variables:
        item = context.get(variable.name)
        if item is None or not item.defined:
            logger.debug('Skipping undefined variable %r in %s', variable.name, expression)
            continue
        try:
            values.append(expand_variable(variable, item, operator))
        except UnicodeEncodeError as e:
            raise ExpansionError('Value of {!r} cannot be encoded as UTF-8: {}'.format(
                variable.name, e
            ))

    if not values:
        return ''
    return operator.first + operator.separator.join(values)


def expand_variable(variable, item, operator):
    """
    :raise ExpansionError: if a prefix modifier is applied to a List or Assoc
    :param VariableSpec         variable:
    :param DataItem             item:
    :param operators.Operator   operator:
    :rtype: str
    """
    if isinstance(item, Atom):
        value = item.value
        if variable.prefix is not None:
            # Truncate characters, not encoded bytes
            value = value[:variable.prefix]
        return _named(variable.name, encode(value, operator.allow_reserved), operator)

    if variable.prefix is not None:
        raise ExpansionError('Prefix modifier cannot be applied to {} value of {!r}'.format(
            type(item).__name__, variable.name
        ))

    if isinstance(item, List):
        values = [encode(v, operator.allow_reserved) for v in item]
        if not variable.explode:
            return _named(variable.name, ','.join(values), operator)
        if operator.named:
            return operator.separator.join(_named(variable.name, v, operator) for v in values)
        return operator.separator.join(values)

    if isinstance(item, Assoc):
        pairs = [(encode(k, operator.allow_reserved), encode(v, operator.allow_reserved))
                 for k, v in item.items()]
        if not variable.explode:
            flattened = ','.join(','.join(pair) for pair in pairs)
            return _named(variable.name, flattened, operator)
        if operator.named:
            return operator.separator.join(_named(k, v, operator) for k, v in pairs)
        return operator.separator.join('{}={}'.format(k, v) for k, v in pairs)

    raise ExpansionError('Unsupported value for {!r}: {!r}'.format(variable.name, item))


def _named(name, value, operator):
    """ Applies the name=value form for named operators """
    if not operator.named:
        return value
    if not value:
        return name + operator.ifemp
    return '{}={}'.format(name, value)
