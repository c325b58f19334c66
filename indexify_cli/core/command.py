"""Executable command units.

Every node of the command tree is a ``Command``: something the dispatch loop
can take through ``pre_run`` -> ``run`` -> ``next()`` -> ``post_run``.

Three shapes of node exist:

- composite: a ``@command`` dataclass with one ``subcommand()`` field; its
  ``next()`` is that field's value.
- selector: a ``@selector`` class listing the alternatives of a subcommand;
  exactly one is populated and ``next()`` is that payload.
- leaf: a ``@command`` dataclass without a ``subcommand()`` field; ``next()``
  is None.

``next()`` is never written by hand. The decorators in
``indexify_cli.core.container`` generate it when the class is defined.

Example:
    @command
    class List(Command):
        namespace: str

        async def run(self) -> None:
            ...

    @selector
    class GraphCmd(Selector):
        list: List

    @command
    class Graph(Command):
        cmd: GraphCmd = subcommand()
"""

from __future__ import annotations

import dataclasses
from typing import Any, ClassVar, Dict, Optional, Tuple

from indexify_cli.core.exceptions import CommandDefinitionError, ValidationError

#: Dataclass field metadata key marking the subcommand field of a composite
SUBCOMMAND = "indexify.subcommand"


class Command:
    """Base class for all executable command nodes.

    Every hook defaults to a no-op so nodes only override what they need.
    Failures are raised, never returned.
    """

    def pre_run(self) -> None:
        """Run before ``run``; the root uses it for process-wide setup."""

    async def run(self) -> None:
        """Do the node's work. May await network I/O."""

    def post_run(self) -> None:
        """Run after the whole chain below this node has completed."""

    def next(self) -> Optional[Command]:
        """The child to continue into, or None to end the chain."""
        return None


def subcommand(**kwargs: Any) -> Any:
    """Mark a dataclass field as the subcommand of a composite.

    Accepts the same keyword arguments as ``dataclasses.field``.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[SUBCOMMAND] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def is_subcommand(field: dataclasses.Field) -> bool:
    """Whether a dataclass field was created with ``subcommand()``."""
    return bool(field.metadata.get(SUBCOMMAND, False))


class Selector(Command):
    """A closed choice between named subcommands.

    Alternatives are declared as class annotations, each naming one Command
    type. An instance holds exactly one populated alternative:

        GraphCmd(list=List(namespace="default"))

    Instances are immutable. Alternatives that are not populated read as None.
    """

    #: Alternative name -> payload type, filled in by ``@selector``
    __alternatives__: ClassVar[Dict[str, type]] = {}
    __closed__: ClassVar[bool] = False

    __slots__ = ("_active",)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__mro__[1:]:
            if base.__dict__.get("__closed__", False):
                raise CommandDefinitionError(
                    cls.__name__,
                    f"cannot extend closed selector {base.__name__}",
                )

    def __init__(self, **alternatives: Optional[Command]) -> None:
        cls = type(self)
        if not cls.__dict__.get("__closed__", False):
            raise ValidationError(
                f"{cls.__name__} must be decorated with @selector before use"
            )

        unknown = sorted(set(alternatives) - set(cls.__alternatives__))
        if unknown:
            raise ValidationError(
                f"{cls.__name__} has no alternative(s): {', '.join(unknown)}"
            )

        populated = [(k, v) for k, v in alternatives.items() if v is not None]
        if len(populated) != 1:
            raise ValidationError(
                f"{cls.__name__} requires exactly one alternative, "
                f"got {len(populated)}"
            )

        name, payload = populated[0]
        expected = cls.__alternatives__[name]
        if not isinstance(payload, expected):
            raise ValidationError(
                f"{cls.__name__}.{name} expects {expected.__name__}, "
                f"got {type(payload).__name__}"
            )

        object.__setattr__(self, "_active", (name, payload))

    @classmethod
    def of(cls, payload: Command) -> Selector:
        """Build the selector whose alternative type matches ``payload``."""
        matches = [
            name
            for name, tp in cls.__alternatives__.items()
            if issubclass(type(payload), tp)
        ]
        if len(matches) != 1:
            reason = "is ambiguous" if matches else "matches no alternative"
            raise ValidationError(
                f"{type(payload).__name__} {reason} of {cls.__name__}"
            )
        return cls(**{matches[0]: payload})

    @property
    def active(self) -> str:
        """Name of the populated alternative."""
        return self._active[0]

    @property
    def payload(self) -> Command:
        """The populated alternative's command."""
        return self._active[1]

    def __getattr__(self, name: str) -> Optional[Command]:
        # Only reached for names missing from the instance and the class
        alternatives = type(self).__alternatives__
        if name in alternatives:
            active, payload = object.__getattribute__(self, "_active")
            return payload if name == active else None
        raise AttributeError(f"{type(self).__name__!r} has no attribute {name!r}")

    def __setattr__(self, name: str, value: Any) -> None:
        raise dataclasses.FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise dataclasses.FrozenInstanceError(f"cannot delete field {name!r}")

    def _key(self) -> Tuple[str, Command]:
        return self._active

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def __repr__(self) -> str:
        name, payload = self._active
        return f"{type(self).__name__}({name}={payload!r})"
