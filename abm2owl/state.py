"""
Build a state ontology (A-box) for the current state of a model.

Each snapshot gets its own ontology IRI, derived from the model IRI and the
tick, and imports the structure ontology. Turtles, patches, reified links and
the global individual are named in the state ontology's namespace; classes
and properties are those of the structure ontology.
"""

import logging

from rdflib import Literal, URIRef
from rdflib.namespace import XSD

from abm2owl.axioms import Axiom, ClassAssertion, DataPropertyAssertion, ObjectPropertyAssertion
from abm2owl.errors import InitializationFault
from abm2owl.naming import NamingPolicy
from abm2owl.options import NO_PATCHES_OPTION, OptionSet
from abm2owl.structure import (
    LOCATION_PROPERTY,
    PATCH_CLASS,
    X_PROPERTY,
    Y_PROPERTY,
    link_class_name,
    link_label,
    reify_in,
    reify_out,
)
from abm2owl.values import adapt
from abm2owl.world import LINK_OWN_START, PATCH_OWN_START, TURTLE_OWN_START

logger = logging.getLogger(__name__)

ONTOLOGY_EXTENSIONS = (".owl", ".rdf", ".owx", ".ttl", ".nt", ".jsonld", ".xml")


def state_ontology_iri(model_iri: str, tick: float) -> URIRef:
    """Model IRI with "-<tick>" inserted before a known file extension.

    >>> state_ontology_iri("http://ex.org/farm.owl", 3)
    rdflib.term.URIRef('http://ex.org/farm-3.0.owl')

    A trailing "#" or "/" is dropped first, so the stamp stays in the path.
    """
    model = str(model_iri).rstrip("#/")
    stamp = f"-{float(tick)!r}"
    for ext in ONTOLOGY_EXTENSIONS:
        if model.endswith(ext):
            return URIRef(model[: -len(ext)] + stamp + ext)
    return URIRef(model + stamp)


def _coords(axioms: set[Axiom], naming: NamingPolicy, indiv: URIRef, x: float, y: float) -> None:
    axioms.add(DataPropertyAssertion(naming.prop(X_PROPERTY), indiv, Literal(float(x), datatype=XSD.double)))
    axioms.add(DataPropertyAssertion(naming.prop(Y_PROPERTY), indiv, Literal(float(y), datatype=XSD.double)))


def turtle_axioms(world, naming: NamingPolicy, options: OptionSet, state_iri: str) -> set[Axiom]:
    """Class membership, location and own variables of every turtle."""
    axioms: set[Axiom] = set()
    spatial = not options.has(NO_PATCHES_OPTION)
    location = naming.prop(LOCATION_PROPERTY)

    for turtle in world.turtles():
        indiv = naming.individual(turtle.id, state_iri)
        kind = world.breed(turtle.breed)
        axioms.add(ClassAssertion(naming.cls(kind.label), indiv))

        if spatial and not turtle.hidden:
            patch = naming.individual(turtle.patch_here(), state_iri)
            axioms.add(ObjectPropertyAssertion(location, indiv, patch))
            _coords(axioms, naming, indiv, turtle.x, turtle.y)

        for i, own in enumerate(kind.owns):
            value = turtle.variable(TURTLE_OWN_START + i)
            axioms |= adapt(indiv, naming.prop(own), value, naming, state_iri)
    return axioms


def patch_axioms(world, naming: NamingPolicy, options: OptionSet, state_iri: str) -> set[Axiom]:
    axioms: set[Axiom] = set()
    if options.has(NO_PATCHES_OPTION):
        return axioms

    patch_cls = naming.cls(PATCH_CLASS)
    patch_vars = world.patches_own()
    for patch in world.patches():
        indiv = naming.individual(patch.id, state_iri)
        axioms.add(ClassAssertion(patch_cls, indiv))
        _coords(axioms, naming, indiv, patch.pxcor, patch.pycor)

        for i in range(PATCH_OWN_START, len(patch_vars)):
            axioms |= adapt(indiv, naming.prop(patch_vars[i]), patch.variable(i), naming, state_iri)
    return axioms


def link_axioms(world, naming: NamingPolicy, state_iri: str) -> set[Axiom]:
    """Links as object property assertions, or as individuals of their reified class."""
    axioms: set[Axiom] = set()
    for link in world.links():
        kind = world.link_breed(link.breed)
        label = link_label(kind)
        end1 = naming.individual(link.end1, state_iri)
        end2 = naming.individual(link.end2, state_iri)

        if not kind.owns:
            axioms.add(ObjectPropertyAssertion(naming.prop(label), end1, end2))
            continue

        indiv = naming.individual(link.id, state_iri)
        axioms.add(ClassAssertion(naming.cls(link_class_name(label)), indiv))
        axioms.add(ObjectPropertyAssertion(naming.prop(reify_out(label)), end1, indiv))
        axioms.add(ObjectPropertyAssertion(naming.prop(reify_in(label)), indiv, end2))
        for i, own in enumerate(kind.owns):
            value = link.variable(LINK_OWN_START + i)
            axioms |= adapt(indiv, naming.prop(own), value, naming, state_iri)
    return axioms


def global_axioms(world, naming: NamingPolicy, state_iri: str) -> set[Axiom]:
    axioms: set[Axiom] = set()
    subject = naming.global_individual()
    for name in world.globals():
        axioms |= adapt(subject, naming.prop(name), world.global_value(name), naming, state_iri)
    return axioms


def state_axioms(session, world, tick: float) -> tuple[URIRef, set[Axiom]]:
    """IRI and axioms of the state ontology for `world` at `tick`."""
    if session is None or world is None:
        raise InitializationFault("Bug: state build invoked without a session or world")
    model_iri = session.require_model()
    naming = session.naming
    options = session.options
    state_iri = state_ontology_iri(model_iri, tick)

    axioms: set[Axiom] = set()
    axioms |= turtle_axioms(world, naming, options, state_iri)
    axioms |= patch_axioms(world, naming, options, state_iri)
    axioms |= link_axioms(world, naming, state_iri)
    axioms |= global_axioms(world, naming, state_iri)
    logger.info("Built %d state axioms for %s", len(axioms), state_iri)
    return state_iri, axioms
