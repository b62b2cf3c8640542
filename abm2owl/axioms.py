"""
Axiom values.

Builders collect axioms in sets: every axiom is a frozen dataclass, so adding
an equivalent axiom twice is a no-op. Each axiom knows how to write itself to
an rdflib Graph (OWL 2 RDF mapping).
"""

from dataclasses import dataclass
from typing import Iterable

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.namespace import OWL, RDF, RDFS

# Property characteristics
FUNCTIONAL = OWL.FunctionalProperty
INVERSE_FUNCTIONAL = OWL.InverseFunctionalProperty
SYMMETRIC = OWL.SymmetricProperty
ASYMMETRIC = OWL.AsymmetricProperty
IRREFLEXIVE = OWL.IrreflexiveProperty


class Axiom:
    def add_to(self, g: Graph) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Declaration(Axiom):
    entity: URIRef
    entity_type: URIRef  # owl:Class, owl:ObjectProperty, owl:DatatypeProperty, ...

    def add_to(self, g):
        g.add((self.entity, RDF.type, self.entity_type))


@dataclass(frozen=True)
class ObjectPropertyDomain(Axiom):
    prop: URIRef
    domain: URIRef

    def add_to(self, g):
        g.add((self.prop, RDFS.domain, self.domain))


@dataclass(frozen=True)
class ObjectPropertyRange(Axiom):
    prop: URIRef
    range: URIRef

    def add_to(self, g):
        g.add((self.prop, RDFS.range, self.range))


@dataclass(frozen=True)
class DataPropertyDomain(Axiom):
    prop: URIRef
    domain: URIRef

    def add_to(self, g):
        g.add((self.prop, RDFS.domain, self.domain))


@dataclass(frozen=True)
class DataPropertyRange(Axiom):
    prop: URIRef
    datatype: URIRef

    def add_to(self, g):
        g.add((self.prop, RDFS.range, self.datatype))


@dataclass(frozen=True)
class PropertyCharacteristic(Axiom):
    prop: URIRef
    characteristic: URIRef

    def add_to(self, g):
        g.add((self.prop, RDF.type, self.characteristic))


@dataclass(frozen=True)
class SubPropertyChainOf(Axiom):
    chain: tuple[URIRef, ...]
    super_prop: URIRef

    def add_to(self, g):
        head = BNode()
        Collection(g, head, list(self.chain))
        g.add((self.super_prop, OWL.propertyChainAxiom, head))


@dataclass(frozen=True)
class AnnotationAssertion(Axiom):
    subject: URIRef
    annotation_prop: URIRef
    value: Literal

    def add_to(self, g):
        g.add((self.subject, self.annotation_prop, self.value))


@dataclass(frozen=True)
class ClassAssertion(Axiom):
    cls: URIRef
    individual: URIRef

    def add_to(self, g):
        g.add((self.individual, RDF.type, self.cls))


@dataclass(frozen=True)
class ObjectPropertyAssertion(Axiom):
    prop: URIRef
    subject: URIRef
    object: URIRef

    def add_to(self, g):
        g.add((self.subject, self.prop, self.object))


@dataclass(frozen=True)
class DataPropertyAssertion(Axiom):
    prop: URIRef
    subject: URIRef
    value: Literal

    def add_to(self, g):
        g.add((self.subject, self.prop, self.value))


def of_type(axioms: Iterable[Axiom], axiom_type: type) -> list:
    """All axioms in `axioms` that are instances of `axiom_type`."""
    return [a for a in axioms if isinstance(a, axiom_type)]
