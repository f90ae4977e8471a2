from uritmpl import charsets
from uritmpl import constants
from uritmpl.exceptions import TemplateValidationError
from uritmpl.operators import Operator


class Node(object):
    """ Immutable, value compared piece of a parsed template """

    def __eq__(self, other):
        return type(other) is type(self) and other._key() == self._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __str__(self):
        return self.format()

    def format(self):
        """
        Canonical template text for the node

        :rtype: str
        """
        raise NotImplementedError

    def _key(self):
        raise NotImplementedError


class Prefix(Node):
    def __init__(self, length):
        """
        :raise TemplateValidationError: if length is not a positive integer
        :param int  length: Maximum number of characters to keep
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise TemplateValidationError(
                'Prefix length must be a positive integer: {!r}'.format(length)
            )
        self._length = length

    def __repr__(self):
        return 'Prefix({!r})'.format(self._length)

    @property
    def length(self):
        """
        :rtype: int
        """
        return self._length

    def format(self):
        return '{}{}'.format(constants.PREFIX_MODIFIER, self._length)

    def _key(self):
        return self._length


class Explode(Node):
    def __repr__(self):
        return 'Explode()'

    def format(self):
        return constants.EXPLODE_MODIFIER

    def _key(self):
        return ()


class VariableSpec(Node):
    def __init__(self, name, modifier=None):
        """
        :raise TemplateValidationError: if the name is not a valid varname
        :param str                      name:
        :param Prefix|Explode|None      modifier:
        """
        if not isinstance(name, str) or not charsets.is_varname(name):
            raise TemplateValidationError('Invalid variable name: {!r}'.format(name))
        if modifier is not None and not isinstance(modifier, (Prefix, Explode)):
            raise TemplateValidationError('Invalid modifier: {!r}'.format(modifier))
        self._name = name
        self._modifier = modifier

    def __repr__(self):
        if self._modifier is None:
            return 'VariableSpec({!r})'.format(self._name)
        return 'VariableSpec({!r}, {!r})'.format(self._name, self._modifier)

    @property
    def explode(self):
        """
        :rtype: bool
        """
        return isinstance(self._modifier, Explode)

    @property
    def modifier(self):
        """
        :rtype: Prefix|Explode|None
        """
        return self._modifier

    @property
    def name(self):
        """
        :rtype: str
        """
        return self._name

    @property
    def prefix(self):
        """
        Prefix length if the variable is truncated, otherwise None

        :rtype: int|None
        """
        return self._modifier.length if isinstance(self._modifier, Prefix) else None

    def format(self):
        if self._modifier is None:
            return self._name
        return self._name + self._modifier.format()

    def _key(self):
        return self._name, self._modifier


class Literal(Node):
    def __init__(self, text):
        """
        :raise TemplateValidationError: if the text is empty or contains
            characters outside of the literal character set
        :param str  text:
        """
        if not isinstance(text, str) or not text:
            raise TemplateValidationError('Literal text cannot be empty')
        invalid = sorted({c for c in text if not charsets.is_literal(c)})
        if invalid:
            raise TemplateValidationError(
                'Invalid literal characters in {!r}: {}'.format(text, invalid)
            )
        self._text = text

    def __repr__(self):
        return 'Literal({!r})'.format(self._text)

    @property
    def text(self):
        """
        :rtype: str
        """
        return self._text

    def format(self):
        return self._text

    def _key(self):
        return self._text


class Expression(Node):
    def __init__(self, variables, operator=None):
        """
        :raise TemplateValidationError: if there are no variables
        :param Iterable[VariableSpec]   variables:
        :param Operator|None            operator:
        """
        variables = tuple(variables)
        if not variables:
            raise TemplateValidationError('Expressions require at least one variable')
        for variable in variables:
            if not isinstance(variable, VariableSpec):
                raise TemplateValidationError('Invalid variable: {!r}'.format(variable))
        if operator is not None and not isinstance(operator, Operator):
            raise TemplateValidationError('Invalid operator: {!r}'.format(operator))
        self._variables = variables
        self._operator = operator

    def __repr__(self):
        if self._operator is None:
            return 'Expression({!r})'.format(list(self._variables))
        return 'Expression({!r}, operator={!r})'.format(list(self._variables), self._operator)

    @property
    def operator(self):
        """
        :rtype: Operator|None
        """
        return self._operator

    @property
    def variables(self):
        """
        :rtype: tuple[VariableSpec]
        """
        return self._variables

    def format(self):
        operator = self._operator.format() if self._operator else ''
        return '{}{}{}{}'.format(
            constants.EXPRESSION_START,
            operator,
            constants.VARIABLE_SEPARATOR.join(v.format() for v in self._variables),
            constants.EXPRESSION_END,
        )

    def _key(self):
        return self._variables, self._operator


class Template(Node):
    def __init__(self, parts=()):
        """
        :raise TemplateValidationError: if any part is not a Literal or Expression
        :param Iterable[Literal|Expression] parts: Parts in render order
        """
        parts = tuple(parts)
        for part in parts:
            if not isinstance(part, (Literal, Expression)):
                raise TemplateValidationError('Invalid template part: {!r}'.format(part))
        self._parts = parts

    def __repr__(self):
        return 'Template({!r})'.format(list(self._parts))

    def __iter__(self):
        return iter(self._parts)

    def __len__(self):
        return len(self._parts)

    @property
    def expressions(self):
        """
        :rtype: tuple[Expression]
        """
        return tuple(p for p in self._parts if isinstance(p, Expression))

    @property
    def parts(self):
        """
        :rtype: tuple[Literal|Expression]
        """
        return self._parts

    @property
    def variables(self):
        """
        Names of the variables in the order they first appear

        :rtype: tuple[str]
        """
        names = []
        for expression in self.expressions:
            for variable in expression.variables:
                if variable.name not in names:
                    names.append(variable.name)
        return tuple(names)

    def format(self):
        return ''.join(part.format() for part in self._parts)

    def _key(self):
        return self._parts
