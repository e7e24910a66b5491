from collections import namedtuple

import re

# ECMAScript whitespace and line terminators (\s would also match \x1c-\x1f and \x85)
WHITESPACE_REGEX = re.compile(r'[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]')
OPERATOR_FRAGMENTS = ('|', '&')


class BackableStringIterator(object):
    '''
    Iterator over the characters of a string which can "un-read" the character
    it has just returned. Only one character can be pushed back at a time.

    >>> it = BackableStringIterator('ab')
    >>> next(it)
    'a'
    >>> it.back()
    >>> next(it)
    'a'
    '''

    def __init__(self, string):
        self._iter = iter(string)
        self._prev_cache = None     # the last character returned by `next`
        self._prev = None           # the character waiting to be replayed

    def __iter__(self):
        return self

    def __next__(self):
        prev = self._prev
        if prev is not None:
            self._prev = None
            self._prev_cache = prev
            return prev

        try:
            value = next(self._iter)
        except StopIteration:
            self._prev_cache = None
            raise

        self._prev_cache = value
        return value

    def back(self):
        assert self._prev_cache is not None, 'nothing to push back'
        self._prev = self._prev_cache
        self._prev_cache = None


class LowLevelTokenType(object):
    WhiteSpace = 0
    Eof        = 1
    Identifier = 2
    Operator   = 3
    Invalid    = 4


LowLevelToken = namedtuple('LowLevelToken', ['type', 'value'])


def is_whitespace(char):
    return WHITESPACE_REGEX.match(char) is not None


def is_operator_fragment(char):
    return char in OPERATOR_FRAGMENTS


class LowLevelScanner(object):
    '''
    Splits a string into whitespace runs, identifiers, operators (`||` and `&&`)
    and invalid fragments, finishing with an `Eof` token. Once `Eof` has been
    produced, the scanner drops the source and stops iterating.
    '''

    def __init__(self, source):
        self._source_iter = BackableStringIterator(source)
        self._has_reached_eof = False

    def __iter__(self):
        return self

    def __next__(self):
        if self._has_reached_eof:
            raise StopIteration

        token = self._scan()
        if token.type == LowLevelTokenType.Eof:
            self._destroy()

        return token

    def _destroy(self):
        self._source_iter = None
        self._has_reached_eof = True

    def _scan(self):
        char = next(self._source_iter, None)
        if char is None:
            return LowLevelToken(LowLevelTokenType.Eof, None)

        if is_whitespace(char):
            return self._scan_whitespace(char)

        if is_operator_fragment(char):
            return self._scan_operator(char)

        return self._scan_identifier(char)

    def _scan_run(self, char, predicate):
        '''Consume characters as long as they satisfy the predicate.'''

        source_iter = self._source_iter
        buf = [char]
        for value in source_iter:
            if not predicate(value):
                source_iter.back()
                break
            buf.append(value)

        return ''.join(buf)

    def _scan_whitespace(self, char):
        value = self._scan_run(char, is_whitespace)
        return LowLevelToken(LowLevelTokenType.WhiteSpace, value)

    def _scan_identifier(self, char):
        # only whitespace ends an identifier (operator fragments are absorbed)
        value = self._scan_run(char, lambda c: not is_whitespace(c))
        return LowLevelToken(LowLevelTokenType.Identifier, value)

    def _scan_operator(self, char):
        source_iter = self._source_iter
        value = next(source_iter, None)
        if value is None:
            return LowLevelToken(LowLevelTokenType.Invalid, char)

        # NOTE: A non-operator character right after a fragment is swallowed,
        # whereas a different fragment is pushed back for the next scan.
        if not is_operator_fragment(value):
            return LowLevelToken(LowLevelTokenType.Invalid, char)

        if value != char:
            source_iter.back()
            return LowLevelToken(LowLevelTokenType.Invalid, char)

        return LowLevelToken(LowLevelTokenType.Operator, char + value)


class TokenType(object):
    Directive         = 0
    AcceptPullRequest = 1
    RejectPullRequest = 2
    AssignReviewer    = 3
    UserName          = 4
    Unknown           = 5
    Eof               = 6


HighLevelToken = namedtuple('HighLevelToken', ['type', 'value'])

DIRECTIVES = {
    'r?': TokenType.AssignReviewer,
    'r-': TokenType.RejectPullRequest,
    'r+': TokenType.AcceptPullRequest,
}


def create_high_level_tokens(token):
    '''Expand an identifier into one or more semantic tokens.'''

    value = token.value
    command = DIRECTIVES.get(value)
    if command is not None:
        yield HighLevelToken(TokenType.Directive, None)
        yield HighLevelToken(command, None)
    elif value.startswith('@'):
        yield HighLevelToken(TokenType.UserName, value[1:])
    else:
        yield HighLevelToken(TokenType.Unknown, None)


def tokenize_string(string):
    '''
    Generator over the semantic tokens of a comment. Whitespace, operators and
    invalid fragments are dropped, and the generator ends at the end of input.

    For example, "r? @foo" yields `Directive`, `AssignReviewer` and `UserName('foo')`.
    '''

    for token in LowLevelScanner(string):
        if token.type == LowLevelTokenType.Eof:
            return
        if token.type == LowLevelTokenType.Identifier:
            for high_level_token in create_high_level_tokens(token):
                yield high_level_token
