"""
naming.py
---------

Deterministic IRIs for model entities.

Notes
-----
- Classes keep the case of the name, with the first letter upper-cased.
- Properties and individuals are lower-cased.
- Characters that are not legal in an OWL local name are replaced with "_",
  and the parentheses NetLogo prints around agents ("(turtle 3)") are dropped.
- Everything lives in the model ontology namespace unless another ontology
  IRI is given (state ontologies put their individuals in their own IRI).
- The same (name, kind, ontology IRI) always gives the same IRI, so the
  structure and state builds can refer to each other's entities without
  sharing anything but the policy.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from rdflib import URIRef

_ILLEGAL_RE = re.compile(r"[^\w.\-]+")

GLOBAL_INDIVIDUAL = "globals"


class EntityType(Enum):
    CLASS = "class"
    PROPERTY = "property"
    INDIVIDUAL = "individual"


def local_name(name: str) -> str:
    """Make `name` safe to use as the local part of an IRI."""
    s = name.strip()
    if s.startswith("(") and s.endswith(")"):
        s = s[1:-1].strip()
    s = _ILLEGAL_RE.sub("_", s)
    if not s or not (s[0].isalpha() or s[0] == "_"):
        s = "_" + s
    return s


def namespace_of(ontology_iri: str) -> str:
    s = str(ontology_iri)
    return s if s.endswith(("#", "/")) else s + "#"


class NamingPolicy:
    """Maps model entity names to IRIs, and answers domain/range overrides.

    Args:
        model_iri: IRI of the structure ontology
        domains: relation name -> breed name declared as the relation's domain
        ranges: relation name -> breed name declared as the relation's range
    """

    def __init__(self, model_iri: str, domains: Mapping[str, str] | None = None,
                 ranges: Mapping[str, str] | None = None):
        self.model_iri = URIRef(str(model_iri))
        self._domains = MappingProxyType({k.lower(): v for k, v in (domains or {}).items()})
        self._ranges = MappingProxyType({k.lower(): v for k, v in (ranges or {}).items()})

    def resolve(self, name: str, kind: EntityType, ontology_iri: str | None = None) -> URIRef:
        local = local_name(name)
        if kind is EntityType.CLASS:
            local = local[0].upper() + local[1:]
        else:
            local = local.lower()
        return URIRef(namespace_of(ontology_iri or self.model_iri) + local)

    def cls(self, name: str) -> URIRef:
        return self.resolve(name, EntityType.CLASS)

    def prop(self, name: str) -> URIRef:
        return self.resolve(name, EntityType.PROPERTY)

    def individual(self, name: str, ontology_iri: str) -> URIRef:
        return self.resolve(name, EntityType.INDIVIDUAL, ontology_iri)

    def global_individual(self) -> URIRef:
        """The individual that carries the values of all global variables."""
        return self.resolve(GLOBAL_INDIVIDUAL, EntityType.INDIVIDUAL)

    # Overrides
    def has_domain(self, relation: str) -> bool:
        return relation.lower() in self._domains

    def domain(self, relation: str) -> str | None:
        return self._domains.get(relation.lower())

    def has_range(self, relation: str) -> bool:
        return relation.lower() in self._ranges

    def range(self, relation: str) -> str | None:
        return self._ranges.get(relation.lower())
