from ..runner.request import APIError, request_with_requests
from .interface import APIProvider


class GithubAPIProvider(APIProvider):
    issue_url = '%s/repos/%s/%s/issues/%s'
    labels_url = issue_url + '/labels'
    assignees_url = issue_url + '/assignees'
    headers = {
        'Content-Type': 'application/json',
        'Accept': 'application/vnd.github+json',
    }

    def __init__(self, config, payload, json_request=request_with_requests):
        super(GithubAPIProvider, self).__init__(config, payload)
        self.json_request = json_request

    def add_assignees(self, assignees):
        '''Add the given users to the assignees of the associated issue/PR'''

        url = self._url(self.assignees_url)
        self._request('POST', url, {'assignees': assignees})

    def remove_assignees(self, assignees):
        '''Remove the given users from the assignees of the associated issue/PR'''

        url = self._url(self.assignees_url)
        self._request('DELETE', url, {'assignees': assignees})

    def get_labels(self):
        '''
        Fetches the labels for the issue/PR from which this payload was generated.
        This makes an API request only when the payload doesn't have any label information.
        Presently, the labels live only as long as the payload.
        '''
        if self.labels is not None:
            return self.labels

        self.labels = self._handle_labels('GET')
        return self.labels

    def replace_labels(self, labels=[]):
        '''
        Method to replace the labels in remote with the given list of labels.
        Clears all labels by default (i.e., empty list).
        '''

        self.labels = self._handle_labels('PUT', labels={'labels': labels})

    # Private methods

    def _url(self, template):
        return template % (self.config.api_url.rstrip('/'), self.owner, self.repo, self.number)

    def _handle_labels(self, method, labels=None):
        url = self._url(self.labels_url)
        data = self._request(method, url, labels)
        return [obj['name'].lower() for obj in data]

    def _request(self, method, url, data=None):
        '''
        Authenticated request to Github using the token from the configuration.
        Raises `APIError` for responses other than 2xx.
        '''

        headers = dict(self.headers)
        headers['Authorization'] = 'token %s' % self.config.token

        self.logger.info('%s: %s (data: %s)', method, url, data)
        resp = self.json_request(method, url, data=data, headers=headers)
        if resp.code < 200 or resp.code >= 300:
            self.logger.error('Got a %s response: %r', resp.code, resp.data)
            raise APIError(resp.code, resp.data)

        return resp.data
