from .event_handler import EventHandler

import importlib
import json
import os
import os.path as path


def get_handlers_for(event):
    '''
    Get the handlers corresponding to an event.

    Every handler lives in its own package under this directory, along with a
    'config.json' for it. The package exposes the handler class as `handler`,
    and the class lists the events it cares about in `events`. This yields the
    handler names along with lambdas - the caller should pass the `APIProvider`
    object to actually initialize the handlers.
    '''

    root = path.dirname(__file__)
    for handler_name in sorted(os.listdir(root)):
        handler_dir = path.join(root, handler_name)
        handler_path = path.join(handler_dir, '__init__.py')
        config_path = path.join(handler_dir, 'config.json')

        # Every handler should have its own 'config.json'
        if not (path.exists(handler_path) and path.exists(config_path)):
            continue

        module = importlib.import_module('%s.%s' % (__name__, handler_name))
        if event not in module.handler.events:
            continue

        with open(config_path, 'r') as fd:
            handler_config = json.load(fd)

        yield (handler_name, _wrap(module.handler, handler_config))


def _wrap(handler, handler_config):
    return lambda api: handler(api, handler_config)
