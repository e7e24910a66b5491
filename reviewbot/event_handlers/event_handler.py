from ..runner.config import get_logger

from copy import deepcopy

import re


class EventHandler(object):
    '''
    Interface object for handlers. Every Github payload is associated with an action. This interface
    has the actions and their corresponding methods. The handlers inherit from this interface and
    override these methods. Once we've initialized a handler, we call `handle_payload` which calls
    the method corresponding to the action.
    '''
    # NOTE: "created" comes from `issue_comment` events, whereas "submitted" comes from
    # `pull_request_review` events. Both carry a body that may have commands in it.
    actions = {
        'created'   : 'on_new_comment',
        'submitted' : 'on_review_submit',
    }

    # Events this handler subscribes to (overridden by the handlers).
    events = []

    def __init__(self, api, config):
        self.name = self.__class__.__name__
        self.api = api
        self.config = config
        self.logger = get_logger(__name__)

    def get_matches_from_config(self, config):
        '''
        Some handlers support per-repo configuration, keyed by regex patterns for
        "owner/repo". This merges the values of all patterns matching the payload's repo.
        '''

        if not (self.api.owner and self.api.repo):
            self.logger.error("There's no owner/repo info in payload. Bleh?")
            return None

        result = None
        string = '%s/%s' % (self.api.owner, self.api.repo)
        for pattern in config:
            if re.search(pattern.lower(), string.lower()):
                if not result:
                    result = deepcopy(config[pattern])
                elif isinstance(result, list):
                    result.extend(config[pattern])
                elif isinstance(result, dict):
                    result.update(config[pattern])

        return result

    # Methods corresponding to the actions

    def on_new_comment(self):
        pass

    def on_review_submit(self):
        pass

    def handle_payload(self):
        '''Call the method corresponding to the payload's action.'''

        if not self.config.get('active'):       # pre-check whether the handler is active
            return

        # Check if the handler can only be used in specific patterns of repos.
        allowed_repos = self.config.get('allowed_repos', [])
        this_repo = '%s/%s' % (self.api.owner, self.api.repo)
        if allowed_repos and not any(re.search(pat, this_repo) for pat in allowed_repos):
            return

        method = self.actions.get(self.api.payload['action'])
        if method is not None:
            getattr(self, method)()
