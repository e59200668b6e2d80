"""Shell variables and the state shared across one session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping


class Environment:
    """Ordered set of shell variables.

    A variable may be declared without a value; its value is then ``None``.
    Looking it up gives an empty string, as it does for an unknown name.
    """

    def __init__(
        self,
        items: Mapping[str, str | None] | Iterable[tuple[str, str | None]] | None = None,
    ) -> None:
        self._vars: dict[str, str | None] = {}
        if items is None:
            return
        pairs = items.items() if isinstance(items, Mapping) else items
        for name, value in pairs:
            self.set(name, value)

    @classmethod
    def from_envp(cls, envp: Iterable[str]) -> Environment:
        """Build an environment from ``NAME=VALUE`` strings."""
        env = cls()
        for entry in envp:
            name, sep, value = entry.partition("=")
            env.set(name, value if sep else None)
        return env

    def get(self, name: str) -> str:
        """Return the value of *name*, or an empty string if it has none."""
        value = self._vars.get(name)
        return value if value is not None else ""

    def set(self, name: str, value: str | None) -> None:
        """Give *name* a value, keeping its place if it already exists."""
        self._vars[name] = value

    def to_envp(self) -> list[str]:
        """Render every variable as a ``NAME=VALUE`` string."""
        return [f"{name}={value or ''}" for name, value in self._vars.items()]

    def __contains__(self, name: object) -> bool:
        return name in self._vars

    def __iter__(self) -> Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __repr__(self) -> str:
        return f"Environment({self._vars!r})"


@dataclass
class ShellState:
    """Variables and last exit status of a running shell."""

    env: Environment = field(default_factory=Environment)
    exit_status: int = 0