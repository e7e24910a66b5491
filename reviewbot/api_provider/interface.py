from ..runner.config import get_logger

DEFAULTS = ['is_pull', 'is_open', 'creator', 'number', 'sender', 'owner', 'repo',
            'assignees', 'comment', 'labels']


def _logins(users):
    return [user['login'].lower() for user in users or []]


class APIProvider(object):
    '''
    The interface used by `GithubAPIProvider` object to take actions based on
    the incoming payload. API provider objects are tied to payloads.

    Once the runner receives a payload, an API provider object is created and
    sent to all handlers. This object extracts the commonly used payload
    attributes, so that the handlers don't have to dig through the payload of
    every event they support.
    '''

    def __init__(self, config, payload):
        self.name = config.name
        self.config = config
        self.payload = payload
        self.logger = get_logger(__name__)

        for attr in DEFAULTS:
            setattr(self, attr, None)

        if payload.get('repository'):
            self.owner = payload['repository']['owner']['login']
            self.repo = payload['repository']['name']
        else:
            self.logger.error('Error getting repository information from payload.')

        if payload.get('sender'):
            self.sender = payload['sender']['login'].lower()

        # NOTE: For comments, Github sends the "issue" key even when the issue is a PR.
        # The issue is a PR only if it has the "pull_request" key.
        if payload.get('pull_request'):
            self._init_issue(payload['pull_request'])
            self.is_pull = True
        elif payload.get('issue'):
            issue = payload['issue']
            self._init_issue(issue)
            self.is_pull = issue.get('pull_request') is not None

        if payload.get('comment'):
            self.comment = payload['comment'].get('body')
        elif payload.get('review'):
            self.comment = payload['review'].get('body')

    def _init_issue(self, issue):
        self.creator = issue['user']['login'].lower()
        self.is_open = issue['state'].lower() == 'open'
        self.number = issue['number']
        self.assignees = _logins(issue.get('assignees'))
        if issue.get('labels') is not None:
            self.labels = [label['name'].lower() for label in issue['labels']]

    # Overridable methods.

    def add_assignees(self, assignees):
        raise NotImplementedError

    def remove_assignees(self, assignees):
        raise NotImplementedError

    def get_labels(self):
        raise NotImplementedError

    def replace_labels(self, labels=[]):
        raise NotImplementedError

    # Default methods depending on the overriddable methods.

    def replace_assignees(self, assignees):
        '''
        Make the given users the only assignees of the issue/PR. Users who are
        already assigned aren't touched.
        '''

        wanted = []
        for name in assignees:
            if name.lower() not in wanted:
                wanted.append(name.lower())

        current = self.assignees or []
        stale = [name for name in current if name not in wanted]
        if stale:
            self.remove_assignees(stale)

        missing = [name for name in wanted if name not in current]
        if missing:
            self.add_assignees(missing)

        self.assignees = wanted

    def update_labels(self, add=[], remove=[]):
        '''
        This fetches the labels corresponding to the given payload, adds/subtracts
        labels based on the method call, and finally replaces all the labels in the issue/PR.
        Since this calls `get_labels` every time this method is called, it's up to the implementor
        to ensure that proper caching is done in that method.
        '''

        to_lower = lambda label: label.lower()
        current_labels = set(map(to_lower, self.get_labels()))
        updated_labels = set(current_labels)
        updated_labels.update(map(to_lower, add))
        updated_labels.difference_update(map(to_lower, remove))
        if updated_labels != current_labels:
            self.replace_labels(sorted(updated_labels))
