import json
import logging
import os
import re

__LOGGERS = {}

DEFAULT_EVENTS = ['issue_comment', 'pull_request_review']


def get_logger(name):
    '''
    `logger.getLogger()` is called all over the place. This makes sure that
    we always get the logger unique to a name.
    '''
    global __LOGGERS
    if __LOGGERS.get(name):
        return __LOGGERS[name]
    else:
        logger = logging.getLogger(name)
        __LOGGERS[name] = logger
        return logger


def init_logger(level=logging.DEBUG):
    '''
    Initializes the logger (in debug mode by default). This should be called
    by the entry points - otherwise, no logging!
    '''

    logging.basicConfig(level=level,
                        format='%(asctime)s %(levelname)s %(module)s - %(funcName)s: %(message)s',
                        datefmt="%Y-%m-%d %H:%M:%S")


def read_file(path):
    '''Reads a file. The testsuite overrides this.'''

    with open(path, 'r') as fd:
        return fd.read()


class Configuration(object):
    '''
    Configuration object for the bot. This is passed around to the runner,
    API providers and handlers. Once this is initialized, one of the loading
    methods should be called to load the configuration. This supports loading values
    from the environment.

    For example, if a key named "token" has a value "ENV::GITHUB_TOKEN", then this
    tries `os.environ.get('GITHUB_TOKEN')` and replaces the occurrences of
    "ENV::GITHUB_TOKEN" with the result. The value is JSON-encoded, so quotes and
    backslashes survive the replacement.
    '''
    def __init__(self):
        self.logger = get_logger(__name__)

    def load_from_file(self, config_path):
        '''Load configuration from the given path'''

        contents = read_file(config_path)
        return self.load_from_string(contents)

    def load_from_string(self, raw_config):
        '''Load configuration from the given raw string.'''

        matches = re.findall(r'"ENV::([A-Z_0-9]*)"', raw_config)
        for m in matches:   # Check and replace env variables (if any)
            if not os.environ.get(m):
                raise KeyError("%r not found in environment" % m)

            value = os.environ[m]
            encoded = json.dumps(value)
            self.logger.debug('Replacing env variable %s', m)
            raw_config = raw_config.replace('"ENV::%s"' % m, encoded)

        config = json.loads(raw_config)
        self.initialize_defaults(config)

    def load_from_env(self, environ=None):
        '''
        Load configuration for a GitHub Actions run, where the workflow exposes
        the token and the repository as environment variables.
        '''

        environ = os.environ if environ is None else environ
        for key in ['GITHUB_TOKEN', 'GITHUB_REPOSITORY']:
            if not environ.get(key):
                raise KeyError("%r not found in environment" % key)

        self.initialize_defaults({
            'name': environ.get('REVIEWBOT_NAME', 'github-actions[bot]'),
            'token': environ['GITHUB_TOKEN'],
            'allowed_repos': ['^%s$' % re.escape(environ['GITHUB_REPOSITORY'])],
            'api_url': environ.get('GITHUB_API_URL', 'https://api.github.com'),
        })

    def initialize_defaults(self, config_dict):
        '''Checks the mandatory keys in config and initializes defaults (if required)'''

        for key, value in config_dict.items():
            setattr(self, key, value)

        for key in ['name', 'token']:
            if not hasattr(self, key):
                raise KeyError("Missing %r in configuration" % key)

        defaults = [
            ('secret', None),
            ('enabled_events', list(DEFAULT_EVENTS)),
            ('allowed_repos', []),
            ('api_url', 'https://api.github.com'),
        ]

        for attr, value in defaults:
            try:
                getattr(self, attr)
            except AttributeError:
                setattr(self, attr, value)

    def __getitem__(self, key):
        try:
            return getattr(self, key)
        except AttributeError:
            return None
