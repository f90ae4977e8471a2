class UriTemplateError(Exception):
    """ Generic base exception for all uritmpl errors """


class ParseError(UriTemplateError):
    """ Failure to parse a value """


class TemplateSyntaxError(ParseError):
    """ Template text that cannot be matched by the grammar """

    def __init__(self, message, position, character=None):
        """
        :param str  message:
        :param int  position:   Zero based column of the failure
        :param str  character:  Offending character, None at end of input
        """
        super(TemplateSyntaxError, self).__init__(message)
        self.position = position
        self.character = character


class FormatError(UriTemplateError):
    """ Failure to format a value """


class ExpansionError(FormatError):
    """ Template cannot be expanded with the given variables """


class ConfigError(UriTemplateError):
    """ Any errors raised from reading a template configuration """


class MissingTemplateError(ConfigError):
    """ Error with a missing template of any type """


class TemplateValidationError(ConfigError):
    """ Errors with template validation """
