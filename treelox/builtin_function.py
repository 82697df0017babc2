import time
from dataclasses import dataclass
from typing import Any, Callable, List

from treelox.environment import Environment


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: int
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return "<native fn>"


def std_clock(args: List[Any]) -> Any:
    return time.time()


NATIVES = [
    BuiltinFunction('clock', 0, std_clock),
]


def populate_globals(env: Environment) -> Environment:
    """Define every native function in `env` (normally the global scope)."""
    for native in NATIVES:
        env.define(native.name, native)
    return env
