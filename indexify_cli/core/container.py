"""Container resolution for command classes.

``@command`` and ``@selector`` inspect a class once, when it is defined, and
install the ``next()`` the dispatch loop follows. Nothing is inspected while
commands execute: the generated methods are a plain attribute read.

Shapes that cannot be resolved raise CommandDefinitionError at import time,
so a broken command tree never produces a runnable program.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from indexify_cli.core.command import Command, Selector, is_subcommand
from indexify_cli.core.exceptions import CommandDefinitionError

C = TypeVar("C", bound=type)

# Names a selector alternative may not take because Selector already uses them
_RESERVED = frozenset(name for name in dir(Selector) if not name.startswith("__"))


def _ensure_class(obj: Any, base: type, decorator: str) -> type:
    name = getattr(obj, "__name__", repr(obj))
    if not inspect.isclass(obj):
        raise CommandDefinitionError(name, f"@{decorator} applies to classes only")
    if not issubclass(obj, base):
        raise CommandDefinitionError(
            name, f"@{decorator} requires a subclass of {base.__name__}"
        )
    if "next" in obj.__dict__:
        raise CommandDefinitionError(
            name, "next() is generated and must not be defined by hand"
        )
    return obj


def _is_command_type(tp: Any) -> bool:
    return inspect.isclass(tp) and issubclass(tp, Command)


def _is_open_selector(tp: Any) -> bool:
    # The Selector base and undecorated subclasses accept any payload
    return issubclass(tp, Selector) and not tp.__dict__.get("__closed__", False)


def _resolve_hints(cls: type, hints: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
    try:
        return hints()
    except NameError as e:
        raise CommandDefinitionError(
            cls.__name__, f"unresolvable annotation ({e})"
        ) from e


def _composite_next(field_name: str) -> Callable[[Command], Optional[Command]]:
    def next(self: Command) -> Optional[Command]:
        return getattr(self, field_name)

    return next


def _leaf_next() -> Callable[[Command], Optional[Command]]:
    def next(self: Command) -> Optional[Command]:
        return None

    return next


def _selector_next() -> Callable[[Selector], Optional[Command]]:
    def next(self: Selector) -> Optional[Command]:
        return self.payload

    return next


def _finish(cls: type, next_impl: Callable[..., Optional[Command]]) -> None:
    next_impl.__name__ = "next"
    next_impl.__qualname__ = f"{cls.__qualname__}.next"
    next_impl.__doc__ = Command.next.__doc__
    setattr(cls, "next", next_impl)


def command(cls: C) -> C:
    """Turn a Command subclass into a frozen dataclass with a generated next().

    At most one field may be marked with ``subcommand()``; its annotation
    must be a Command type. Without a marked field the command is a leaf.
    """
    _ensure_class(cls, Command, "command")
    if issubclass(cls, Selector):
        raise CommandDefinitionError(
            cls.__name__, "selectors are declared with @selector, not @command"
        )

    cls = dataclasses.dataclass(frozen=True)(cls)
    marked = [f for f in dataclasses.fields(cls) if is_subcommand(f)]

    if len(marked) > 1:
        names = ", ".join(f.name for f in marked)
        raise CommandDefinitionError(
            cls.__name__, f"more than one subcommand field ({names})"
        )

    if not marked:
        cls.__subcommand_field__ = None
        _finish(cls, _leaf_next())
        return cls

    field = marked[0]
    hints = _resolve_hints(cls, lambda: typing.get_type_hints(cls))
    child = hints.get(field.name)
    if not _is_command_type(child):
        raise CommandDefinitionError(
            cls.__name__,
            f"subcommand field {field.name!r} must be annotated with a "
            f"Command type, found {child!r}",
        )
    if _is_open_selector(child):
        raise CommandDefinitionError(
            cls.__name__,
            f"subcommand field {field.name!r} names {child.__name__}, "
            "which is not a closed @selector",
        )

    cls.__subcommand_field__ = field.name
    _finish(cls, _composite_next(field.name))
    return cls


def selector(cls: Type[Selector]) -> Type[Selector]:
    """Close a Selector subclass over its annotated alternatives.

    Every own annotation is an alternative and must name exactly one
    Command type. The selector cannot be extended afterwards.
    """
    _ensure_class(cls, Selector, "selector")

    annotations = _resolve_hints(
        cls, lambda: inspect.get_annotations(cls, eval_str=True)
    )
    alternatives: Dict[str, type] = {}
    for name, tp in annotations.items():
        if typing.get_origin(tp) is typing.ClassVar:
            continue
        if name.startswith("_") or name in _RESERVED:
            raise CommandDefinitionError(
                cls.__name__, f"alternative name {name!r} is reserved"
            )
        if not _is_command_type(tp):
            raise CommandDefinitionError(
                cls.__name__,
                f"alternative {name!r} must wrap exactly one Command type, "
                f"found {tp!r}",
            )
        if _is_open_selector(tp):
            raise CommandDefinitionError(
                cls.__name__,
                f"alternative {name!r} names {tp.__name__}, "
                "which is not a closed @selector",
            )
        alternatives[name] = tp

    if not alternatives:
        raise CommandDefinitionError(cls.__name__, "selector has no alternatives")

    cls.__alternatives__ = alternatives
    cls.__closed__ = True
    _finish(cls, _selector_next())
    return cls
