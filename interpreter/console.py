"""Read-eval-print loop. Uses cmd as backend, but every line is a program rather than a command."""

import cmd
from typing import Optional, TextIO

from interpreter.parser.parser import parse
from interpreter.runtime.environment import Environment
from interpreter.runtime.evaluator import Evaluator
from interpreter.runtime.values import is_error
from interpreter.util import PROMPT, Colors


class Console(cmd.Cmd):
    """Interactive session. Bindings made on one line are visible on every later line."""

    prompt = PROMPT

    def __init__(
        self,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        env: Optional[Environment] = None,
        color: bool = False,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        # Read from the given stream rather than through `input()`
        self.use_rawinput = stdin is None
        self.env = Environment() if env is None else env
        self.evaluator = Evaluator()
        self.color = color

    def cmdloop(self, intro: Optional[str] = None) -> None:
        """Read and run lines until the end of the input. Unlike `cmd.Cmd.cmdloop`,
        the end of the input is not turned into a line reading `EOF`."""
        self.preloop()
        if intro is not None:
            self.stdout.write(intro + "\n")

        stop = False
        while not stop:
            line = self.read_line()
            if line is None:
                stop = self.do_EOF("")
            else:
                line = self.precmd(line)
                stop = self.onecmd(line)
                stop = self.postcmd(stop, line)
        self.postloop()

    def read_line(self) -> Optional[str]:
        """Prompt for one line, or return None at the end of the input."""
        if self.use_rawinput:
            try:
                return input(self.prompt)
            except EOFError:
                return None

        self.stdout.write(self.prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")

    def parseline(self, line: str):
        """Hand every line to `default`, as there are no commands."""
        return None, None, line.strip()

    def default(self, line: str) -> bool:
        """Parse and evaluate one line."""
        tree, errors = parse(line)
        if errors:
            for error in errors:
                self.write(str(error), Colors.RED)
            return False

        result = self.evaluator.evaluate(tree, self.env)
        if result is not None:
            self.write(result.inspect(), Colors.RED if is_error(result) else None)
        return False

    def write(self, text: str, color: Optional[str] = None) -> None:
        if self.color and color:
            text = f"{color}{text}{Colors.ENDC}"
        self.stdout.write(text + "\n")

    def emptyline(self) -> bool:
        """Do not repeat previous line on empty line."""
        return False

    def do_EOF(self, arg: str) -> bool:
        """Exits the console."""
        if self.use_rawinput:
            self.stdout.write("\n")
        return True
