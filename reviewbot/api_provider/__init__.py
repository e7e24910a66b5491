from .github_api import GithubAPIProvider
from .interface import APIProvider
