"""Action alphabet and immutable action sequences.

A sequence is the unit of input handed to the target: an ordered list of
actions drawn from a small fixed alphabet (e.g. the buttons of a control
pad). The alphabet may carry a distinguished no-op member, represented by
``None``, which is counted like any other symbol.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Optional

NO_OP = None


@dataclass(frozen=True, slots=True)
class Sequence:
    """Ordered, immutable list of actions.

    Equality and hashing are structural over the actions, so two sequences
    built independently from the same actions are interchangeable.
    """
    actions: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))

    @classmethod
    def of(cls, *actions: Any) -> Sequence:
        """Build a sequence from positional actions."""
        return cls(tuple(actions))

    def append(self, action: Any) -> Sequence:
        """Return a new sequence one element longer."""
        return Sequence(self.actions + (action,))

    def __len__(self) -> int:
        return len(self.actions)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.actions)

    def __getitem__(self, index: int) -> Any:
        return self.actions[index]

    def __str__(self) -> str:
        names = ["-" if a is NO_OP else getattr(a, "name", str(a)) for a in self.actions]
        return "[" + ", ".join(names) + "]"


class ActionAlphabet:
    """Ordered, finite, non-empty set of actions.

    The no-op member, when enabled, is appended after the regular actions so
    that index ``size - 1`` always refers to it.
    """

    def __init__(self, actions: Iterable[Hashable], include_noop: bool = False):
        """Initialize the alphabet.

        Args:
            actions: Regular actions, in the order used for enumeration
            include_noop: Whether to append the distinguished no-op member
        """
        members = list(actions)
        if NO_OP in members:
            raise ValueError("Use include_noop instead of listing None as an action")
        if len(set(members)) != len(members):
            raise ValueError("Alphabet actions must be distinct")
        if include_noop:
            members.append(NO_OP)
        if not members:
            raise ValueError("alphabet cannot be empty")

        self._actions: tuple[Optional[Hashable], ...] = tuple(members)
        self._index = {action: i for i, action in enumerate(self._actions)}
        self.include_noop = include_noop

    @property
    def size(self) -> int:
        return len(self._actions)

    def action_at(self, index: int) -> Optional[Hashable]:
        return self._actions[index]

    def __contains__(self, action: object) -> bool:
        return action in self._index

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Optional[Hashable]]:
        return iter(self._actions)

    def __repr__(self) -> str:
        return f"ActionAlphabet({list(self._actions)!r})"
