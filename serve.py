from flask import Flask, abort, request

from reviewbot.runner.config import init_logger, get_logger
from reviewbot.runner import Configuration, Runner

import os


def create_app(config):
    runner = Runner(config)
    app = Flask(config.name)

    @app.route('/', methods=['POST'])
    def handle_payload():
        headers, raw_payload = request.headers, request.get_data()
        sign = headers.get('X-Hub-Signature-256') or headers.get('X-Hub-Signature')
        status, payload = runner.verify_payload(sign, raw_payload)
        if status is not None:
            abort(status)

        event = headers.get('X-GitHub-Event', '').lower()
        runner.handle_payload(event, payload)
        return 'Yay!', 200

    return app


if __name__ == '__main__':
    init_logger()
    logger = get_logger(__name__)

    config = Configuration()
    config_path = os.environ.get('REVIEWBOT_CONFIG', 'config.json')
    config.load_from_file(config_path)

    app = create_app(config)
    port = int(os.environ.get('PORT', 5000))
    logger.info('Listening on port %s', port)
    app.run(host='0.0.0.0', port=port, threaded=True)
