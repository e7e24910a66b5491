from .. import api_provider, event_handlers
from .config import get_logger, read_file
from .request import request_with_requests

import hashlib
import hmac
import json
import re

SUPPORTED_ACTIONS = ['created', 'submitted']
HASH_FUNCS = ['sha1', 'sha256']


class HandlerError(object):
    '''Enum-like object solely for testing the payload handling result.'''

    DisabledEvent     = 0
    UnregisteredRepo  = 1
    PayloadFromSelf   = 2
    UnsupportedAction = 3


class Runner(object):
    '''
    Runner that receives incoming payloads from Github (either through the webhook
    or from the event file of a workflow run), verifies and filters them, and
    passes them to the handlers subscribed to the event.
    '''
    def __init__(self, config, json_request=request_with_requests):
        self.logger = get_logger(__name__)
        self.config = config
        self.json_request = json_request

    def verify_payload(self, x_hub_signature, raw_payload):
        '''
        This should be called to verify Github's webhook payload. This compares the
        'X-Hub-Signature' header value against the HMAC obtained from the payload
        using the app's "secret" key and a hash function.

        App "secret" key is optional, but it makes sure that you're getting payloads
        from Github. If a third-party found your POST endpoint, then anyone can send a
        cooked-up payload, and your bot will respond and make API requests to Github.
        '''

        if isinstance(raw_payload, str):
            raw_payload = raw_payload.encode('utf-8')

        try:    # All payloads are JSON - other payloads are ignored.
            payload = json.loads(raw_payload.decode('utf-8'))
        except ValueError as err:
            self.logger.debug('Cannot decode payload JSON: %s', err)
            return 400, None

        if not isinstance(payload, dict):
            self.logger.debug('Payload is not a JSON object: %r', payload)
            return 400, None

        if self.config.secret:
            hash_name, signature = ((x_hub_signature or '') + '=').split('=')[:2]
            hash_func = getattr(hashlib, hash_name) if hash_name in HASH_FUNCS else None
            if hash_func is None:
                self.logger.debug('Unknown hash function: %r', hash_name)
                return 403, None

            msg_auth_code = hmac.new(self.config.secret.encode('utf-8'), raw_payload, hash_func)
            hashed = msg_auth_code.hexdigest()

            if not hmac.compare_digest(signature, hashed):
                self.logger.debug('Invalid signature!')
                return 403, None

            self.logger.info("Payload's signature has been verified!")
        else:
            self.logger.warning("Payload's signature can't be verified without secret key!")

        return None, payload

    def handle_event_file(self, x_github_event, event_path):
        '''Handle the event payload written to disk by a workflow run.'''

        payload = json.loads(read_file(event_path))
        return self.handle_payload(x_github_event, payload)

    def handle_payload(self, x_github_event, payload):
        '''
        Check (and filter) the incoming payloads, hook them with the API provider,
        and finally pass them through the handlers for the event.
        '''

        self.logger.info('Received payload (event: %s, action: %s)',
                         x_github_event, payload.get('action'))

        # If our handlers don't care about this event, then ignore this payload.
        if x_github_event not in self.config.enabled_events:
            self.logger.info("Payload doesn't match any enabled events. Skipping...")
            return HandlerError.DisabledEvent

        api = api_provider.GithubAPIProvider(self.config, payload,
                                             json_request=self.json_request)

        # Only accept payloads from registered repositories.
        this_repo = '%s/%s' % (api.owner, api.repo)
        allowed_repos = self.config.allowed_repos
        if allowed_repos and not any(re.search(pat, this_repo) for pat in allowed_repos):
            self.logger.info('Rejected payload from %s', this_repo)
            return HandlerError.UnregisteredRepo

        # Skip payloads sent by the bot itself.
        if api.sender and api.sender == self.config.name.lower():
            self.logger.info('Skipping payload sent by self')
            return HandlerError.PayloadFromSelf

        if payload.get('action') not in SUPPORTED_ACTIONS:
            self.logger.info('Ignoring unsupported action %r', payload.get('action'))
            return HandlerError.UnsupportedAction

        for name, handler in event_handlers.get_handlers_for(x_github_event):
            self.logger.debug('Passing payload to %s', name)
            handler(api).handle_payload()
