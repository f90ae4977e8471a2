from uritmpl import constants


def is_literal(char):
    """
    Whether the character may appear unescaped in the literal text of a
    template

    :param str  char:
    :rtype: bool
    """
    return char in constants.LITERAL_CHARS


def is_varchar(char):
    """
    :param str  char:
    :rtype: bool
    """
    return char in constants.VARCHARS


def is_varname(name):
    """
    Whether the name is one or more dot separated runs of varchars

    :param str  name:
    :rtype: bool
    """
    segments = name.split(constants.NAME_SEPARATOR)
    return all(segment and all(is_varchar(c) for c in segment) for segment in segments)
