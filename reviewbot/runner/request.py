import json
import requests


class APIError(Exception):
    '''Raised when Github responds with a non-2xx status.'''

    def __init__(self, code, data):
        super(APIError, self).__init__('Invalid response (%s): %r' % (code, data))
        self.code = code
        self.data = data


class Response(object):
    ''' The response object that should be returned by all "requesting" functions.'''

    def __init__(self, data, code=200, headers={}):
        self.code = code
        self.headers = headers
        self.data = data

    def is_json(self):
        return isinstance(self.data, (dict, list))


def request_with_requests(method, url, data=None, headers={}):
    '''
    Make a request with the `requests` module to the given `url`
    with the given `method`, (optional) `data` and `headers`
    '''

    data = json.dumps(data) if data is not None else data
    resp = requests.request(method.upper(), url, data=data, headers=headers)
    data = resp.text

    try:
        data = json.loads(data)
    except ValueError:
        pass

    return Response(
        data=data,
        code=resp.status_code,
        headers=resp.headers
    )
