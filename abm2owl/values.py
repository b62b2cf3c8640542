"""
Runtime values of model variables, and how they become data property assertions.

The host hands over raw values; as_value() turns them into one of a closed set
of variants at the boundary:

    Text(str) | Number(float) | Sequence(tuple) | AgentRef(id)
    | AgentCollection(tuple of ids) | Opaque(str)

adapt() then maps each variant to literals:
  - Text               -> xsd:string
  - Number             -> xsd:double
  - Sequence           -> one assertion per element (numbers as xsd:double,
                          agents as xsd:anyURI of their individual, anything
                          else as the element's string rendering). Order is
                          not kept.
  - AgentCollection    -> one xsd:anyURI per member
  - Opaque             -> xsd:string of its rendering
"""

from dataclasses import dataclass
from typing import Any

from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from abm2owl.axioms import DataPropertyAssertion
from abm2owl.naming import NamingPolicy


class Value:
    def render(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Text(Value):
    text: str

    def render(self):
        return self.text


@dataclass(frozen=True)
class Number(Value):
    number: float

    def render(self):
        n = float(self.number)
        # NetLogo prints integral numbers without a fraction: 4, not 4.0
        if n.is_integer() and abs(n) < 1e15:
            return str(int(n))
        return repr(n)


@dataclass(frozen=True)
class Sequence(Value):
    items: tuple[Value, ...]

    def render(self):
        return "[" + " ".join(i.render() for i in self.items) + "]"


@dataclass(frozen=True)
class AgentRef(Value):
    id: str  # e.g. "turtle 3", "patch 1 -2"

    def render(self):
        return f"({self.id})"


@dataclass(frozen=True)
class AgentCollection(Value):
    ids: tuple[str, ...]

    def render(self):
        return "[" + " ".join(f"({i})" for i in self.ids) + "]"


@dataclass(frozen=True)
class Opaque(Value):
    text: str

    def render(self):
        return self.text


def as_value(raw: Any) -> Value:
    """Convert a raw host value into a Value variant.

    JSON snapshots encode agents as {"agent": "turtle 3"} and agent sets as
    {"agents": ["turtle 3", ...]}. Booleans are rendered the way NetLogo
    prints them, and None stands for NetLogo's `nobody`.
    """
    if isinstance(raw, Value):
        return raw
    if isinstance(raw, bool):
        return Opaque("true" if raw else "false")
    if raw is None:
        return Opaque("nobody")
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, (int, float)):
        return Number(float(raw))
    if isinstance(raw, dict):
        if "agent" in raw:
            return AgentRef(str(raw["agent"]))
        if "agents" in raw:
            return AgentCollection(tuple(str(a) for a in raw["agents"]))
        return Opaque(str(raw))
    if isinstance(raw, (set, frozenset)) and all(isinstance(a, AgentRef) for a in raw):
        return AgentCollection(tuple(sorted(a.id for a in raw)))
    if isinstance(raw, (list, tuple)):
        return Sequence(tuple(as_value(r) for r in raw))
    return Opaque(str(raw))


def agent_uri(naming: NamingPolicy, agent_id: str, ontology_iri: str) -> Literal:
    return Literal(str(naming.individual(agent_id, ontology_iri)), datatype=XSD.anyURI)


def _string(text: str) -> Literal:
    return Literal(text, datatype=XSD.string)


def _double(number: float) -> Literal:
    return Literal(float(number), datatype=XSD.double)


def adapt(subject: URIRef, prop: URIRef, value: Value, naming: NamingPolicy,
          ontology_iri: str) -> set[DataPropertyAssertion]:
    """Data property assertions stating that `subject` has `value` for `prop`."""
    if isinstance(value, Text):
        literals = [_string(value.text)]
    elif isinstance(value, Number):
        literals = [_double(value.number)]
    elif isinstance(value, Sequence):
        literals = []
        for item in value.items:
            if isinstance(item, Number):
                literals.append(_double(item.number))
            elif isinstance(item, AgentRef):
                literals.append(agent_uri(naming, item.id, ontology_iri))
            else:
                literals.append(_string(item.render()))
    elif isinstance(value, AgentRef):
        # a lone agent is asserted as its printed name, as NetLogo prints it
        literals = [_string(value.render())]
    elif isinstance(value, AgentCollection):
        literals = [agent_uri(naming, i, ontology_iri) for i in value.ids]
    else:
        literals = [_string(value.render())]

    return {DataPropertyAssertion(prop, subject, lit) for lit in literals}
