"""
world.py
--------

What the builders need to know about a running model, and an in-memory
implementation of it.

A host (a NetLogo extension, a Mesa adapter, a JSON dump, ...) exposes the
SimulationWorld protocol. Agent, link and patch variables are read by slot
index; the first slots of each are the host's built-in variables, so the
model's own variables start at TURTLE_OWN_START, LINK_OWN_START and
PATCH_OWN_START respectively.

JSON snapshot layout read by World.from_dict():

{
  "breeds":       [{"name": "cows", "singular": "cow", "owns": ["age"]}],
  "turtles_own":  ["energy"],
  "link_breeds":  [{"name": "eats", "owns": ["amount"]}],
  "links_own":    [],
  "patches_own":  ["pxcor", "pycor", "pcolor", "plabel", "plabel-color", "grass"],
  "globals":      {"season": "spring", "herd": {"agents": ["turtle 0"]}},
  "turtles": [{"id": "turtle 0", "breed": "cows", "x": 1.2, "y": 0.4,
               "hidden": false, "patch": "patch 1 0", "own": {"age": 3}}],
  "patches": [{"pxcor": 1, "pycor": 0, "own": {"grass": 2.5}}],
  "links":   [{"id": "eats 0 1", "breed": "eats", "end1": "turtle 0",
               "end2": "turtle 1", "directed": true, "own": {"amount": 2}}]
}
"""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Protocol

from abm2owl.errors import ConfigError
from abm2owl.values import Value, as_value

# First slot holding a model-declared variable (earlier slots are built-ins)
TURTLE_OWN_START = 13
LINK_OWN_START = 10
PATCH_OWN_START = 5

PATCH_BUILTINS = ("pxcor", "pycor", "pcolor", "plabel", "plabel-color")


@dataclass(frozen=True)
class Kind:
    """A breed or link breed. `singular`, when given, names it in the ontology."""

    name: str
    owns: tuple[str, ...] = ()
    singular: str | None = None

    @property
    def label(self) -> str:
        return self.singular or self.name

    def matches(self, name: str) -> bool:
        n = name.lower()
        return n == self.name.lower() or (self.singular is not None and n == self.singular.lower())


DEFAULT_TURTLE_KIND = "Turtle"
DEFAULT_LINK_KIND = "link"


def pad_slots(start: int, values: Iterable[Any]) -> tuple:
    """Slot array with `start` empty built-in slots followed by `values`."""
    return (None,) * start + tuple(values)


@dataclass
class TurtleSnapshot:
    id: str
    breed: str
    slots: tuple = ()
    x: float = 0.0
    y: float = 0.0
    hidden: bool = False
    patch: str | None = None

    def variable(self, index: int) -> Value:
        return as_value(self.slots[index] if index < len(self.slots) else None)

    def patch_here(self) -> str:
        if self.patch:
            return self.patch
        return f"patch {_nearest(self.x)} {_nearest(self.y)}"


@dataclass
class PatchSnapshot:
    pxcor: int
    pycor: int
    slots: tuple = ()

    @property
    def id(self) -> str:
        return f"patch {self.pxcor} {self.pycor}"

    def variable(self, index: int) -> Value:
        if index == 0:
            return as_value(self.pxcor)
        if index == 1:
            return as_value(self.pycor)
        return as_value(self.slots[index] if index < len(self.slots) else None)


@dataclass
class LinkSnapshot:
    id: str
    breed: str
    end1: str
    end2: str
    directed: bool = False
    slots: tuple = ()

    def variable(self, index: int) -> Value:
        return as_value(self.slots[index] if index < len(self.slots) else None)


def _nearest(c: float) -> int:
    return int(math.floor(c + 0.5))


class SimulationWorld(Protocol):
    """Read-only view of a model's structure and current state."""

    def breeds(self) -> list[Kind]: ...
    def turtles_own(self) -> list[str]: ...
    def link_breeds(self) -> list[Kind]: ...
    def links_own(self) -> list[str]: ...
    def patches_own(self) -> list[str]: ...
    def globals(self) -> list[str]: ...
    def global_value(self, name: str) -> Value: ...
    def turtles(self) -> Iterable[TurtleSnapshot]: ...
    def patches(self) -> Iterable[PatchSnapshot]: ...
    def links(self) -> Iterable[LinkSnapshot]: ...
    def breed(self, name: str) -> Kind: ...
    def link_breed(self, name: str) -> Kind: ...


@dataclass
class World:
    """In-memory SimulationWorld."""

    breed_kinds: list[Kind] = field(default_factory=list)
    turtle_vars: list[str] = field(default_factory=list)
    link_kinds: list[Kind] = field(default_factory=list)
    link_vars: list[str] = field(default_factory=list)
    patch_vars: list[str] = field(default_factory=lambda: list(PATCH_BUILTINS))
    global_values: dict[str, Any] = field(default_factory=dict)
    turtle_list: list[TurtleSnapshot] = field(default_factory=list)
    patch_list: list[PatchSnapshot] = field(default_factory=list)
    link_list: list[LinkSnapshot] = field(default_factory=list)

    # Structure
    def breeds(self):
        return list(self.breed_kinds)

    def turtles_own(self):
        return list(self.turtle_vars)

    def link_breeds(self):
        return list(self.link_kinds)

    def links_own(self):
        return list(self.link_vars)

    def patches_own(self):
        return list(self.patch_vars)

    def globals(self):
        return list(self.global_values)

    def breed(self, name: str) -> Kind:
        """The breed called `name`. Unbred turtles, and every turtle of a model
        without breeds, belong to the default turtle kind."""
        if not self.breed_kinds or name.lower() in ("turtles", DEFAULT_TURTLE_KIND.lower()):
            return Kind(DEFAULT_TURTLE_KIND, tuple(self.turtle_vars))
        for k in self.breed_kinds:
            if k.matches(name):
                return k
        raise ConfigError(f'No such breed as "{name}"')

    def link_breed(self, name: str) -> Kind:
        if not self.link_kinds:
            return Kind(DEFAULT_LINK_KIND, tuple(self.link_vars))
        for k in self.link_kinds:
            if k.matches(name):
                return k
        raise ConfigError(f'No such link breed as "{name}"')

    # State
    def global_value(self, name: str) -> Value:
        return as_value(self.global_values.get(name))

    def turtles(self):
        return iter(self.turtle_list)

    def patches(self):
        return iter(self.patch_list)

    def links(self):
        return iter(self.link_list)

    @classmethod
    def from_dict(cls, data: dict) -> "World":
        breeds = [_kind(b) for b in data.get("breeds", [])]
        link_breeds = [_kind(b) for b in data.get("link_breeds", [])]
        world = cls(
            breed_kinds=breeds,
            turtle_vars=list(data.get("turtles_own", [])),
            link_kinds=link_breeds,
            link_vars=list(data.get("links_own", [])),
            patch_vars=list(data.get("patches_own", PATCH_BUILTINS)),
            global_values=dict(data.get("globals", {})),
        )

        for t in data.get("turtles", []):
            kind = world.breed(t.get("breed", DEFAULT_TURTLE_KIND))
            own = t.get("own", {})
            world.turtle_list.append(TurtleSnapshot(
                id=t["id"],
                breed=kind.name,
                slots=pad_slots(TURTLE_OWN_START, (own.get(v) for v in kind.owns)),
                x=float(t.get("x", 0.0)),
                y=float(t.get("y", 0.0)),
                hidden=bool(t.get("hidden", False)),
                patch=t.get("patch"),
            ))

        user_patch_vars = world.patch_vars[PATCH_OWN_START:]
        for p in data.get("patches", []):
            own = p.get("own", {})
            world.patch_list.append(PatchSnapshot(
                pxcor=int(p["pxcor"]),
                pycor=int(p["pycor"]),
                slots=pad_slots(PATCH_OWN_START, (own.get(v) for v in user_patch_vars)),
            ))

        for lk in data.get("links", []):
            kind = world.link_breed(lk.get("breed", DEFAULT_LINK_KIND))
            own = lk.get("own", {})
            world.link_list.append(LinkSnapshot(
                id=lk.get("id") or f"{kind.label} {lk['end1']} {lk['end2']}",
                breed=kind.name,
                end1=lk["end1"],
                end2=lk["end2"],
                directed=bool(lk.get("directed", False)),
                slots=pad_slots(LINK_OWN_START, (own.get(v) for v in kind.owns)),
            ))
        return world


def _kind(d: dict) -> Kind:
    return Kind(name=d["name"], owns=tuple(d.get("owns", ())), singular=d.get("singular"))


def load_world(path: str) -> World:
    """Read a JSON model snapshot (layout in the module docstring)."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"World snapshot not found: {path}")
    with p.open(encoding="utf-8") as fh:
        return World.from_dict(json.load(fh))
