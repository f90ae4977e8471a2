from collections import OrderedDict
from collections.abc import Mapping


class DataItem(object):
    """ Value bound to a template variable """

    def __init__(self, value):
        self._value = value

    def __eq__(self, other):
        return type(other) is type(self) and other._value == self._value

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __repr__(self):
        return '{}({!r})'.format(self.__class__.__name__, self.value)

    @property
    def defined(self):
        """
        Whether the value takes part in expansion. Empty lists and maps are
        considered undefined, see RFC 6570 section 2.3.

        :rtype: bool
        """
        return True

    @property
    def value(self):
        raise NotImplementedError

    def _key(self):
        return self._value


class Atom(DataItem):
    def __init__(self, value):
        """
        :param str  value:
        """
        if not isinstance(value, str):
            raise TypeError('Atom values must be strings: {!r}'.format(value))
        super(Atom, self).__init__(value)

    @property
    def value(self):
        """
        :rtype: str
        """
        return self._value


class List(DataItem):
    def __init__(self, values):
        """
        :param Iterable[str]    values:
        """
        values = tuple(values)
        for value in values:
            if not isinstance(value, str):
                raise TypeError('List values must be strings: {!r}'.format(value))
        super(List, self).__init__(values)

    def __iter__(self):
        return iter(self._value)

    def __len__(self):
        return len(self._value)

    @property
    def defined(self):
        return bool(self._value)

    @property
    def value(self):
        """
        :rtype: list[str]
        """
        return list(self._value)


class Assoc(DataItem):
    def __init__(self, pairs):
        """
        :param dict|Iterable[tuple[str, str]]   pairs: Key/value pairs, the
            insertion order is preserved
        """
        items = OrderedDict(pairs.items() if isinstance(pairs, Mapping) else pairs)
        for key, value in items.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError('Assoc keys and values must be strings: {!r}: {!r}'.format(
                    key, value
                ))
        super(Assoc, self).__init__(items)

    def __iter__(self):
        return iter(self._value)

    def __len__(self):
        return len(self._value)

    @property
    def defined(self):
        return bool(self._value)

    @property
    def value(self):
        """
        :rtype: dict[str, str]
        """
        return dict(self._value)

    def items(self):
        """
        :rtype: list[tuple[str, str]]
        """
        return list(self._value.items())

    def _key(self):
        return tuple(self._value.items())


def to_data_item(value):
    """
    Converts a raw python value to the DataItem it represents

    :raise TypeError: if the value has no DataItem equivalent
    :param value:
    :rtype: DataItem|None
    :return: None if the value is None, ie, undefined
    """
    if value is None or isinstance(value, DataItem):
        return value
    if isinstance(value, str):
        return Atom(value)
    if isinstance(value, bool):
        return Atom(str(value).lower())
    if isinstance(value, (int, float)):
        return Atom(str(value))
    if isinstance(value, Mapping):
        return Assoc((str(k), _to_string(v)) for k, v in value.items())
    if isinstance(value, (list, tuple)):
        return List(_to_string(v) for v in value)
    raise TypeError('Unsupported variable value: {!r}'.format(value))


def _to_string(value):
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    raise TypeError('Unsupported variable value: {!r}'.format(value))


class VariableContext(Mapping):
    """
    Read only mapping of variable names to the DataItem they are bound to.
    Absent names are undefined variables.
    """

    @classmethod
    def from_dict(cls, variables):
        """
        :param VariableContext|dict|Iterable[tuple] variables:
        :rtype: VariableContext
        """
        if isinstance(variables, VariableContext):
            return variables
        return cls(variables)

    def __init__(self, variables=None):
        """
        :raise TypeError: if any value cannot be converted to a DataItem
        :param dict|Iterable[tuple[str, object]] variables: Raw values or
            DataItems. Duplicate names keep the last value given, None values
            are left undefined.
        """
        items = variables.items() if isinstance(variables, Mapping) else (variables or ())
        self._variables = {}
        for name, value in items:
            item = to_data_item(value)
            if item is None:
                self._variables.pop(name, None)
            else:
                self._variables[name] = item

    def __repr__(self):
        return 'VariableContext({!r})'.format(self._variables)

    def __getitem__(self, name):
        return self._variables[name]

    def __iter__(self):
        return iter(self._variables)

    def __len__(self):
        return len(self._variables)

    def atom(self, name):
        """
        :param str  name:
        :rtype: str|None
        :return: Value if the variable is bound to an Atom, otherwise None
        """
        return self._typed(name, Atom)

    def list(self, name):
        """
        :param str  name:
        :rtype: list[str]|None
        :return: Values if the variable is bound to a List, otherwise None
        """
        return self._typed(name, List)

    def assoc(self, name):
        """
        :param str  name:
        :rtype: dict[str, str]|None
        :return: Key/value pairs if the variable is bound to an Assoc,
            otherwise None
        """
        return self._typed(name, Assoc)

    def _typed(self, name, cls):
        item = self._variables.get(name)
        return item.value if isinstance(item, cls) else None
