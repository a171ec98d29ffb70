from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from interpreter.runtime.values import Value


@dataclass(eq=False)
class Environment:
    """
    A scope mapping names to values, chained to the scope it is nested in.

    Bindings are never copied between scopes: a lookup walks outward through `outer`
    until the name is found, so the nearest binding shadows any further out.
    Functions hold on to the Environment they were defined in, which keeps it alive
    for as long as the function is reachable.
    """

    outer: Optional[Environment] = None
    store: Dict[str, Value] = field(default_factory=dict, repr=False)

    def get(self, name: str) -> Optional[Value]:
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Value) -> Value:
        self.store[name] = value
        return value

    def enclose(self) -> Environment:
        return Environment(outer=self)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None
