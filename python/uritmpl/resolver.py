import logging
import os

import yaml

from uritmpl import constants
from uritmpl import expansion
from uritmpl import parser
from uritmpl.exceptions import (
    ConfigError,
    MissingTemplateError,
    TemplateSyntaxError,
    TemplateValidationError,
)

logger = logging.getLogger(__name__)


class TemplateResolver(object):
    """
    Collection of named URI templates loaded from a configuration of the form
    {'templates': {name: template_string}}. Template strings may reference
    other templates by name with <name>. Expressions such as {@var} are left
    to the parser.
    """

    @classmethod
    def from_environment(cls):
        """
        Reads the environment variable for a file to load the configuration from

        :raise ConfigError: if the environment variable is not set or
                            set to a non-existent file
        :rtype: TemplateResolver
        """
        path = os.getenv(constants.ENV_VAR)
        if not path or not os.path.exists(path):
            raise ConfigError(
                'Invalid environment path for uritmpl configuration: '
                '{}={}'.format(constants.ENV_VAR, path)
            )
        return cls.from_file(path)

    @classmethod
    def from_file(cls, filepath):
        """
        :param str  filepath:
        :rtype: TemplateResolver
        """
        logger.debug('Loading template configuration from %s', filepath)
        with open(filepath) as f:
            config = yaml.safe_load(f)
        return cls(config)

    def __init__(self, config):
        """
        :raise ConfigError: if the configuration has no templates section, or
            any template cannot be parsed
        :param dict[str, dict]  config:
        """
        if not isinstance(config, dict) or not isinstance(config.get(constants.KEY_TEMPLATE), dict):
            raise ConfigError('Configuration requires a {!r} mapping'.format(constants.KEY_TEMPLATE))
        self._config = config[constants.KEY_TEMPLATE]
        self._patterns = {}
        self._templates = {}

        for name in self._config:
            # Templates can reference other templates which recursively load,
            # avoid reloading already evaluated templates
            if name not in self._templates:
                self._load_template(name)

    def __repr__(self):
        return 'TemplateResolver({!r})'.format({constants.KEY_TEMPLATE: self._config})

    @property
    def templates(self):
        """
        :rtype: dict[str, Template]
        """
        return self._templates.copy()

    def expand(self, template_name, fields):
        """
        :raise MissingTemplateError: if no template exists with the name
        :raise ExpansionError: if the fields cannot be rendered by the template
        :param str                  template_name:
        :param VariableContext|dict fields:
        :rtype: str
        """
        return expansion.expand(self.get_template(template_name), fields)

    def get_template(self, template_name):
        """
        :raise MissingTemplateError: if no template exists with the name
        :param str  template_name:
        :rtype: Template
        """
        template = self._templates.get(template_name)
        if template is None:
            raise MissingTemplateError('Unknown template: {!r}'.format(template_name))
        return template

    def names(self):
        """
        :rtype: list[str]
        """
        return sorted(self._templates)

    def pattern(self, template_name):
        """
        Template string with all template references substituted

        :raise MissingTemplateError: if no template exists with the name
        :param str  template_name:
        :rtype: str
        """
        self.get_template(template_name)
        return self._patterns[template_name]

    def _load_template(self, template_name):
        """
        :param str  template_name:
        :rtype: Template
        """
        pattern = self._resolve_pattern(template_name, ())
        try:
            template = parser.parse(pattern)
        except TemplateSyntaxError as e:
            raise ConfigError('Invalid template {!r}: {}'.format(template_name, e))
        logger.debug('Loaded template %r: %s', template_name, pattern)
        self._templates[template_name] = template
        return template

    def _resolve_pattern(self, template_name, loading):
        """
        Substitutes the pattern of every referenced template into the named
        template's string.

        :param str              template_name:
        :param tuple[str, ...]  loading: Names of the templates currently
                                         being resolved, used to detect cycles
        :rtype: str
        """
        pattern = self._patterns.get(template_name)
        if pattern is not None:
            return pattern
        if template_name in loading:
            raise TemplateValidationError('Circular template reference: {}'.format(
                ' -> '.join(loading + (template_name,))
            ))
        try:
            config_string = self._config[template_name]
        except KeyError:
            raise MissingTemplateError('Unknown template: {!r}'.format(template_name))
        if not isinstance(config_string, str):
            raise ConfigError('Template {!r} must be a string: {!r}'.format(
                template_name, config_string
            ))

        # Rebuild the string by cutting at the indices of each reference and
        # replacing the reference with the target template's pattern.
        segments = []
        last_idx = 0
        for match in constants.PATTERN_REFERENCE.finditer(config_string):
            start, end = match.span()
            segments.append(config_string[last_idx:start])
            segments.append(self._resolve_pattern(match.group(1), loading + (template_name,)))
            last_idx = end
        segments.append(config_string[last_idx:])

        pattern = ''.join(segments)
        self._patterns[template_name] = pattern
        return pattern
