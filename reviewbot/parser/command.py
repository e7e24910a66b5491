from .scanner import TokenType, tokenize_string

from collections import namedtuple


class CommandType(object):
    AssignReviewer    = 0
    AcceptPullRequest = 1
    RejectPullRequest = 2


Command = namedtuple('Command', ['type', 'target'])

COMMANDS = {
    TokenType.AssignReviewer    : CommandType.AssignReviewer,
    TokenType.AcceptPullRequest : CommandType.AcceptPullRequest,
    TokenType.RejectPullRequest : CommandType.RejectPullRequest,
}


def _collect_reviewers(tokens, start):
    '''Usernames following a review request, up to the next directive.'''

    reviewers = []
    for token in tokens[start:]:
        if token.type == TokenType.Directive:
            break
        if token.type == TokenType.UserName and token.value and token.value not in reviewers:
            reviewers.append(token.value)
    return reviewers


def parse_string(string):
    '''
    Find the first usable command in a comment, or return None.

    For example,
    "r? @foo @bar" returns an `AssignReviewer` command targeting ['foo', 'bar'], while
    "r? please r+" returns an `AcceptPullRequest` command (a review request without
    any username is ignored).
    '''

    tokens = list(tokenize_string(string))
    for idx, token in enumerate(tokens[:-1]):
        if token.type != TokenType.Directive:
            continue

        command = COMMANDS.get(tokens[idx + 1].type)
        if command is None:
            continue

        if command == CommandType.AssignReviewer:
            reviewers = _collect_reviewers(tokens, idx + 2)
            if reviewers:
                return Command(command, reviewers)
            continue

        return Command(command, [])

    return None
