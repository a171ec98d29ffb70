import sys

from interpreter.console import Console
from interpreter.parser.parser import Parser, parse
from interpreter.runtime.environment import Environment
from interpreter.runtime.evaluator import Evaluator, evaluate
from interpreter.scanner.scanner import Scanner
from interpreter.token import Token
from interpreter.type import Type
from interpreter.util import RECURSION_LIMIT

# Every call in the language takes several Python frames
sys.setrecursionlimit(RECURSION_LIMIT)
