"""Run a program file, or start the interactive console when no file is given."""

import argparse
import sys
from typing import List, Optional

from interpreter.console import Console
from interpreter.error.communicator import Communicator
from interpreter.error.parser_error import ParserException
from interpreter.parser.parser import Parser
from interpreter.runtime.environment import Environment
from interpreter.runtime.evaluator import Evaluator
from interpreter.runtime.values import is_error
from interpreter.scanner.scanner import Scanner


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pratt",
        description="Interpreter for a small expression language.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="file to interpret and run (if empty, goes to the interactive console)",
    )
    parser.add_argument(
        "--print-ast",
        action="store_true",
        help="print the parsed program with explicit grouping instead of running it",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="do not color error messages",
    )
    return parser


def run_file(filename: str, print_ast: bool = False, color: bool = True) -> int:
    with open(filename, "r", encoding="utf8") as f:
        program = f.read()

    parser = Parser(Scanner(program))
    tree = parser.parse_program()
    try:
        Communicator.communicate(parser.errors, ParserException, color=color)
    except ParserException as e:
        print(str(e).strip(), file=sys.stderr)
        return 1

    if print_ast:
        try:
            print(tree)
        except RecursionError:
            print("maximum nesting depth exceeded", file=sys.stderr)
            return 1
        return 0

    result = Evaluator().evaluate(tree, Environment())
    if result is not None:
        print(result.inspect())
    return 1 if is_error(result) else 0


def main(argv: Optional[List[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)

    if args.file is not None:
        return run_file(args.file, print_ast=args.print_ast, color=not args.no_color)

    Console(color=not args.no_color).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
