from ...parser import CommandType, parse_string
from .. import EventHandler

# label keys in the handler config, one per state of the pull request
STATE_KEYS = ['review', 'accepted', 'rejected']


class ReviewCommandHandler(EventHandler):
    '''
    Reacts to review commands left in pull request comments and reviews.

     - "r? @foo @bar" assigns the requested reviewers (in place of the current assignees).
     - "r+" (accepted) or "r-" (changes requested) hands the pull request back to its author.

    Optionally, the handler keeps a state label in sync with the command. The labels are
    configured per repo, like so,

        "labels": {
            "servo/.*": {
                "review": "S-awaiting-review",
                "accepted": "S-awaiting-merge",
                "rejected": "S-needs-code-changes"
            }
        }
    '''

    events = ['issue_comment', 'pull_request_review']

    def on_new_comment(self):
        self._handle_body()

    def on_review_submit(self):
        self._handle_body()

    def _handle_body(self):
        if not self.api.is_pull:
            self.logger.debug('Ignoring comment on issue #%s', self.api.number)
            return

        body = self.api.comment
        if not isinstance(body, str):
            self.logger.warning('Comment body should be a string, got %r', body)
            return

        command = parse_string(body)
        if command is None:
            self.logger.info('No review command in comment on #%s', self.api.number)
            return

        if command.type == CommandType.AssignReviewer:
            self.assign_reviewer(command.target)
        elif command.type == CommandType.AcceptPullRequest:
            self.accept_pull_request()
        elif command.type == CommandType.RejectPullRequest:
            self.reject_pull_request()
        else:
            raise ValueError('Unknown command: %r' % (command,))

    def assign_reviewer(self, reviewers):
        self.logger.info('Setting requested reviewers: %s', reviewers)
        self.api.replace_assignees(reviewers)
        self._set_state('review')

    def accept_pull_request(self):
        self.logger.info('Pull request #%s accepted, assigning %s',
                         self.api.number, self.api.creator)
        self.api.replace_assignees([self.api.creator])
        self._set_state('accepted')

    def reject_pull_request(self):
        self.logger.info('Pull request #%s needs changes, assigning %s',
                         self.api.number, self.api.creator)
        self.api.replace_assignees([self.api.creator])
        self._set_state('rejected')

    def _set_state(self, state):
        labels = self.get_matches_from_config(self.config.get('labels', {}))
        if not labels or not labels.get(state):
            return

        remove = [labels[key] for key in STATE_KEYS if key != state and labels.get(key)]
        self.api.update_labels(add=[labels[state]], remove=remove)


handler = ReviewCommandHandler
