from reviewbot.api_provider import APIProvider, GithubAPIProvider
from reviewbot.api_provider.interface import DEFAULTS
from reviewbot.runner import APIError, Configuration, Response
from reviewbot.runner.request import request_with_requests

from copy import deepcopy
from unittest import TestCase, mock


def create_config():
    config = Configuration()
    config.initialize_defaults({
        'name': 'test_app',
        'token': 'deadbeef',
    })
    return config


COMMENT_PAYLOAD = {
    'action': 'created',
    'sender': {
        'login': 'Reviewer'
    },
    'repository': {
        'owner': {
            'login': 'foo'
        },
        'name': 'bar'
    },
    'comment': {
        'body': 'r? @baz',
    },
    'issue': {
        'pull_request': {},
        'labels': [
            { 'name': 'S-Awaiting-Review' }
        ],
        'user': {
            'login': 'Author'
        },
        'assignees': [
            { 'login': 'Reviewer' }
        ],
        'state': 'open',
        'number': 200,
    }
}

REVIEW_PAYLOAD = {
    'action': 'submitted',
    'sender': {
        'login': 'reviewer'
    },
    'repository': {
        'owner': {
            'login': 'foo'
        },
        'name': 'bar'
    },
    'review': {
        'body': 'r+',
    },
    'pull_request': {
        'user': {
            'login': 'Author'
        },
        'assignees': [],
        'state': 'open',
        'number': 50,
    }
}


def comment_payload(body='r? @baz'):
    payload = deepcopy(COMMENT_PAYLOAD)
    payload['comment']['body'] = body
    return payload


def review_payload(body='r+'):
    payload = deepcopy(REVIEW_PAYLOAD)
    payload['review']['body'] = body
    return payload


class FakeRequest(object):
    '''Records the requests and answers them with the given responses (in order).'''

    def __init__(self, *responses):
        self.calls = []
        self.responses = list(responses)

    def __call__(self, method, url, data=None, headers={}):
        self.calls.append((method, url, data, headers))
        if self.responses:
            return self.responses.pop(0)
        return Response(data={})


class APIProviderTests(TestCase):
    def test_api_init(self):
        '''The default interface will only initialize the app name and payload.'''

        config = create_config()
        api = APIProvider(config=config, payload={})
        self.assertEqual(api.name, 'test_app')
        self.assertEqual(api.payload, {})
        self.assertEqual(api.config, config)

        for attr in DEFAULTS:
            self.assertTrue(getattr(api, attr) is None)

    def test_api_comment_payload(self):
        api = APIProvider(config=create_config(), payload=comment_payload())
        self.assertTrue(api.is_pull)
        self.assertTrue(api.is_open)
        self.assertEqual(api.owner, 'foo')
        self.assertEqual(api.repo, 'bar')
        self.assertEqual(api.sender, 'reviewer')
        self.assertEqual(api.creator, 'author')
        self.assertEqual(api.number, 200)
        self.assertEqual(api.assignees, ['reviewer'])
        self.assertEqual(api.labels, ['s-awaiting-review'])
        self.assertEqual(api.comment, 'r? @baz')

    def test_api_issue_comment_payload(self):
        '''Comments on plain issues don't have the "pull_request" key.'''

        payload = comment_payload()
        payload['issue'].pop('pull_request')
        api = APIProvider(config=create_config(), payload=payload)
        self.assertFalse(api.is_pull)

    def test_api_review_payload(self):
        payload = review_payload()
        payload['pull_request']['state'] = 'closed'
        api = APIProvider(config=create_config(), payload=payload)
        self.assertTrue(api.is_pull)
        self.assertFalse(api.is_open)
        self.assertEqual(api.creator, 'author')
        self.assertEqual(api.number, 50)
        self.assertEqual(api.assignees, [])
        self.assertTrue(api.labels is None)
        self.assertEqual(api.comment, 'r+')

        payload['review']['body'] = None
        api = APIProvider(config=create_config(), payload=payload)
        self.assertTrue(api.comment is None)

    def test_replace_assignees(self):
        api = APIProvider(config=create_config(), payload=comment_payload())
        added, removed = [], []
        api.add_assignees = added.extend
        api.remove_assignees = removed.extend

        api.replace_assignees(['Baz', 'reviewer'])
        self.assertEqual(added, ['baz'])
        self.assertEqual(removed, [])
        self.assertEqual(api.assignees, ['baz', 'reviewer'])

        api.replace_assignees(['qux'])
        self.assertEqual(added, ['baz', 'qux'])
        self.assertEqual(removed, ['baz', 'reviewer'])

        api.replace_assignees(['qux'])      # no-op
        self.assertEqual(added, ['baz', 'qux'])

    def test_replace_assignees_ignores_case(self):
        api = APIProvider(config=create_config(), payload=comment_payload())
        added = []
        api.add_assignees = added.extend
        api.remove_assignees = lambda names: None

        api.replace_assignees(['Foo', 'foo', 'FOO', 'Reviewer'])
        self.assertEqual(added, ['foo'])
        self.assertEqual(api.assignees, ['foo', 'reviewer'])

    def test_update_labels(self):
        api = APIProvider(config=create_config(), payload=comment_payload())
        replaced = []
        api.get_labels = lambda: ['S-awaiting-review', 'C-bug']
        api.replace_labels = replaced.append

        api.update_labels(add=['S-Awaiting-Merge'], remove=['S-awaiting-review'])
        self.assertEqual(replaced, [['c-bug', 's-awaiting-merge']])

        api.update_labels(add=['c-bug'])    # nothing changes, nothing is sent
        self.assertEqual(len(replaced), 1)


class GithubAPIProviderTests(TestCase):
    def test_assignee_requests(self):
        request = FakeRequest()
        api = GithubAPIProvider(create_config(), comment_payload(), json_request=request)
        api.replace_assignees(['baz'])

        url = 'https://api.github.com/repos/foo/bar/issues/200/assignees'
        self.assertEqual([call[:3] for call in request.calls], [
            ('DELETE', url, {'assignees': ['reviewer']}),
            ('POST', url, {'assignees': ['baz']}),
        ])

        headers = request.calls[0][3]
        self.assertEqual(headers['Authorization'], 'token deadbeef')
        self.assertFalse('Authorization' in GithubAPIProvider.headers)

    def test_label_requests(self):
        labels = [{'name': 'S-awaiting-merge'}]
        request = FakeRequest(Response(data=[{'name': 'C-bug'}]), Response(data=labels))
        payload = review_payload()
        api = GithubAPIProvider(create_config(), payload, json_request=request)

        api.update_labels(add=['S-awaiting-merge'], remove=['C-bug'])
        url = 'https://api.github.com/repos/foo/bar/issues/50/labels'
        self.assertEqual([call[:3] for call in request.calls], [
            ('GET', url, None),
            ('PUT', url, {'labels': ['s-awaiting-merge']}),
        ])
        self.assertEqual(api.labels, ['s-awaiting-merge'])

        api.get_labels()    # cached
        self.assertEqual(len(request.calls), 2)

    def test_enterprise_url(self):
        config = create_config()
        config.api_url = 'https://github.example.com/api/v3/'
        request = FakeRequest()
        api = GithubAPIProvider(config, review_payload(), json_request=request)
        api.add_assignees(['foo'])
        self.assertEqual(request.calls[0][1],
                         'https://github.example.com/api/v3/repos/foo/bar/issues/50/assignees')

    def test_error_response(self):
        request = FakeRequest(Response(data={'message': 'Not Found'}, code=404))
        api = GithubAPIProvider(create_config(), comment_payload(), json_request=request)
        with self.assertRaises(APIError) as ctx:
            api.add_assignees(['foo'])
        self.assertEqual(ctx.exception.code, 404)
        self.assertEqual(ctx.exception.data, {'message': 'Not Found'})


class RequestTests(TestCase):
    @mock.patch('reviewbot.runner.request.requests.request')
    def test_request_with_requests(self, request):
        request.return_value = mock.Mock(text='{"foo": "bar"}', status_code=201,
                                         headers={'Link': ''})
        resp = request_with_requests('post', 'https://example.com', data={'a': 1},
                                     headers={'X-Foo': 'bar'})
        request.assert_called_once_with('POST', 'https://example.com', data='{"a": 1}',
                                        headers={'X-Foo': 'bar'})
        self.assertEqual(resp.code, 201)
        self.assertEqual(resp.data, {'foo': 'bar'})
        self.assertTrue(resp.is_json())

    @mock.patch('reviewbot.runner.request.requests.request')
    def test_request_non_json(self, request):
        request.return_value = mock.Mock(text='diff --git', status_code=200, headers={})
        resp = request_with_requests('GET', 'https://example.com')
        request.assert_called_once_with('GET', 'https://example.com', data=None, headers={})
        self.assertEqual(resp.data, 'diff --git')
        self.assertFalse(resp.is_json())
