from reviewbot.runner.config import get_logger, init_logger
from reviewbot.runner import Configuration, Runner

import os
import sys


def main(environ):
    '''
    Entry point for a GitHub Actions workflow. The workflow exposes the event name
    and the path to the event payload in the environment. If `REVIEWBOT_CONFIG` points
    to a JSON file, then the configuration is loaded from there instead.
    '''

    config = Configuration()
    config_path = environ.get('REVIEWBOT_CONFIG')
    if config_path:
        config.load_from_file(config_path)
    else:
        config.load_from_env(environ)

    runner = Runner(config)
    return runner.handle_event_file(environ['GITHUB_EVENT_NAME'],
                                    environ['GITHUB_EVENT_PATH'])


if __name__ == '__main__':
    init_logger()
    logger = get_logger(__name__)

    try:
        result = main(os.environ)
    except Exception:
        logger.exception('Failed to handle the event')
        sys.exit(1)

    if result is not None:
        logger.info('Event was skipped (reason: %s)', result)
