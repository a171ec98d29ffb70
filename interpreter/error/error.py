from dataclasses import dataclass

from interpreter.error.communicator import Communicator
from interpreter.util import Colors, Span


# Python exceptions to differentiate the stage in which errors are thrown
class InterpreterException(Exception):
    pass


@dataclass
class InterpreterError:
    program: str
    span: Span

    @property
    def message(self) -> str:
        raise NotImplementedError()

    def __str__(self) -> str:
        return self.message

    def create_error(
        self,
        before: str = "",
        after: str = "",
        class_name="InterpreterError",
        color: bool = True,
    ) -> str:
        return Communicator.create_message(
            self.program,
            self.span,
            class_name,
            before,
            after,
            color=Colors.RED if color else None,
        )

    def detailed(self, color: bool = True) -> str:
        return self.create_error(self.message, color=color)

