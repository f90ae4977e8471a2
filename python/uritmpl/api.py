"""
Entry points for parsing, formatting and expanding URI Templates.

Parsing and expansion raise TemplateSyntaxError and ExpansionError
respectively; the try_* variants return None instead for callers that treat
an unusable template as a value.
"""
from uritmpl import expansion
from uritmpl import parser
from uritmpl.exceptions import ExpansionError, TemplateSyntaxError
from uritmpl.nodes import Template


def parse(text):
    """
    :raise TemplateSyntaxError: if the text is not a valid template
    :param str  text:
    :rtype: Template
    """
    return parser.parse(text)


def try_parse(text):
    """
    :param str  text:
    :rtype: Template|None
    :return: None if the text is not a valid template
    """
    try:
        return parser.parse(text)
    except TemplateSyntaxError:
        return None


def format_template(template):
    """
    :param Template template:
    :rtype: str
    """
    return template.format()


def expand(template, context):
    """
    Expands a Template, or template text which is parsed first. The result
    is the URI as a string, it is not parsed or normalised further.

    :raise TemplateSyntaxError: if given text that is not a valid template
    :raise ExpansionError: if the template cannot be rendered with the variables
    :param Template|str         template:
    :param VariableContext|dict context:
    :rtype: str
    """
    if not isinstance(template, Template):
        template = parser.parse(template)
    return expansion.expand(template, context)


def try_expand(template, context):
    """
    :param Template|str         template:
    :param VariableContext|dict context:
    :rtype: str|None
    :return: None if the template is invalid or cannot be rendered
    """
    try:
        return expand(template, context)
    except (TemplateSyntaxError, ExpansionError):
        return None
