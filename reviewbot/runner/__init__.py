from .config import Configuration
from .request import APIError, Response
from .runner import HandlerError, Runner
