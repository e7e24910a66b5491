from .command import Command, CommandType, parse_string
from .scanner import HighLevelToken, LowLevelScanner, LowLevelToken, LowLevelTokenType
from .scanner import TokenType, tokenize_string
