from __future__ import annotations

from dataclasses import dataclass, field

from interpreter.type import Type
from interpreter.util import Span


@dataclass(frozen=True)
class Token:
    text: str
    type: Type
    span: Span = field(repr=False, compare=False, default_factory=Span.default)

    def __post_init__(self) -> None:
        # The scanner hands over the name of the matched regex group
        if not isinstance(self.type, Type):
            object.__setattr__(self, "type", Type.to_type(self.type))

    def __hash__(self) -> int:
        return hash((self.text, self.type))

    def __str__(self) -> str:
        return self.text
