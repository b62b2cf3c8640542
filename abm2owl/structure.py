"""
Build a structure ontology (T-box) for a model.

Breeds become OWL classes, links become object properties (unless they have
their own variables, in which case the link is reified as a class), and own
variables become data properties. Patches are a class.

A few standard entities are needed when patches are included: the `location`
object property records which patch a visible turtle is on, and the `x`/`y`
data properties record the co-ordinates of turtles and patches. The
"no-patches" option suppresses all of them.

Links can be directed or undirected. Undirected links can be asserted
symmetric; directed links asymmetric; and all links irreflexive, since a
turtle cannot link to itself. The "relations" option enables these; asymmetric
and irreflexive properties (and property chains for reified links) are OWL 2
only and also need the "owl2" option.
"""

import logging
from enum import Enum
from typing import Iterable

from rdflib import Literal
from rdflib.namespace import OWL, RDFS, XSD

from abm2owl.axioms import (
    ASYMMETRIC,
    FUNCTIONAL,
    INVERSE_FUNCTIONAL,
    IRREFLEXIVE,
    SYMMETRIC,
    AnnotationAssertion,
    Axiom,
    DataPropertyDomain,
    DataPropertyRange,
    Declaration,
    ObjectPropertyDomain,
    ObjectPropertyRange,
    PropertyCharacteristic,
    SubPropertyChainOf,
)
from abm2owl.errors import ConfigError, InitializationFault
from abm2owl.naming import NamingPolicy
from abm2owl.options import NO_PATCHES_OPTION, OWL2_OPTION, RELATIONS_OPTION, OptionSet
from abm2owl.world import DEFAULT_LINK_KIND, DEFAULT_TURTLE_KIND, PATCH_BUILTINS, Kind

logger = logging.getLogger(__name__)

PATCH_CLASS = "Patch"
TURTLE_CLASS = DEFAULT_TURTLE_KIND
LINK_PROPERTY = DEFAULT_LINK_KIND
LOCATION_PROPERTY = "location"
X_PROPERTY = "x"
Y_PROPERTY = "y"

NO_MEMBERS_COMMENT = "No members of this link breed to compute directedness"


class Directedness(Enum):
    DIRECTED = "directed"
    UNDIRECTED = "undirected"
    UNKNOWN = "unknown"


def reify_out(link: str) -> str:
    """Property from the 'from' turtle to the reified link."""
    return link + "_"


def reify_in(link: str) -> str:
    """Property from the reified link to the 'to' turtle."""
    return "_" + link


def link_class_name(link: str) -> str:
    return link[:1].upper() + link[1:]


def link_label(kind: Kind) -> str:
    return kind.label.lower()


# --------------------
# Directedness
# --------------------
def infer_directedness(world, strict: bool = True) -> dict[str, Directedness]:
    """Classify each link breed from its members.

    Returns link label -> DIRECTED/UNDIRECTED for every breed that has at
    least one link; breeds missing from the result have no members. With
    `strict`, a breed with both directed and undirected members raises
    ConfigError; otherwise such a breed is left out.
    """
    directed: set[str] = set()
    undirected: set[str] = set()
    for link in world.links():
        label = link_label(world.link_breed(link.breed))
        (directed if link.directed else undirected).add(label)

    mixed = directed & undirected
    if mixed and strict:
        name = sorted(mixed)[0]
        raise ConfigError(f"Members of {name} are not consistently directed or undirected")

    result = {label: Directedness.DIRECTED for label in directed - mixed}
    result.update({label: Directedness.UNDIRECTED for label in undirected - mixed})
    return result


# --------------------
# Helpers
# --------------------
def add_class_and_properties(axioms: set[Axiom], naming: NamingPolicy, name: str,
                             owns: Iterable[str]) -> None:
    """Declare class `name` and a data property (domained to it) per variable."""
    cls = naming.cls(name)
    axioms.add(Declaration(cls, OWL.Class))
    for own in owns:
        prop = naming.prop(own)
        axioms.add(Declaration(prop, OWL.DatatypeProperty))
        axioms.add(DataPropertyDomain(prop, cls))


def add_link_property(axioms: set[Axiom], naming: NamingPolicy, link: str,
                      domain: str | None, range_: str | None,
                      functional: bool = False, inverse_functional: bool = False) -> None:
    prop = naming.prop(link)
    axioms.add(Declaration(prop, OWL.ObjectProperty))
    if domain is not None:
        axioms.add(ObjectPropertyDomain(prop, naming.cls(domain)))
    if range_ is not None:
        axioms.add(ObjectPropertyRange(prop, naming.cls(range_)))
    if functional:
        axioms.add(PropertyCharacteristic(prop, FUNCTIONAL))
    if inverse_functional:
        axioms.add(PropertyCharacteristic(prop, INVERSE_FUNCTIONAL))


# --------------------
# Axiom families
# --------------------
def breed_axioms(world, naming: NamingPolicy) -> set[Axiom]:
    """A class per breed (or Turtle, when there are no breeds) with its variables."""
    axioms: set[Axiom] = set()
    breeds = world.breeds()
    if not breeds:
        add_class_and_properties(axioms, naming, TURTLE_CLASS, world.turtles_own())
    for breed in breeds:
        add_class_and_properties(axioms, naming, breed.label, breed.owns)
    return axioms


def patch_axioms(world, naming: NamingPolicy, options: OptionSet) -> set[Axiom]:
    axioms: set[Axiom] = set()
    if options.has(NO_PATCHES_OPTION):
        return axioms

    reserved = {b.lower() for b in PATCH_BUILTINS}
    owns = [v for v in world.patches_own() if v.lower() not in reserved]
    add_class_and_properties(axioms, naming, PATCH_CLASS, owns)

    # x and y get no domain: both patches and (visible) turtles of any breed use them
    for coord in (X_PROPERTY, Y_PROPERTY):
        prop = naming.prop(coord)
        axioms.add(Declaration(prop, OWL.DatatypeProperty))
        axioms.add(DataPropertyRange(prop, XSD.double))

    add_link_property(axioms, naming, LOCATION_PROPERTY, naming.domain(LOCATION_PROPERTY),
                      PATCH_CLASS, functional=True)
    return axioms


def link_axioms(world, naming: NamingPolicy, options: OptionSet) -> set[Axiom]:
    """Object properties (or reified classes) for each link breed."""
    directedness: dict[str, Directedness] = {}
    if options.has(RELATIONS_OPTION):
        directedness = infer_directedness(world)

    axioms: set[Axiom] = set()
    kinds = world.link_breeds() or [Kind(LINK_PROPERTY, tuple(world.links_own()))]
    for kind in kinds:
        label = link_label(kind)
        add_link(axioms, naming, label, kind.owns, directedness.get(label, Directedness.UNKNOWN), options)
    return axioms


def add_link(axioms: set[Axiom], naming: NamingPolicy, link: str, owns: Iterable[str],
             directedness: Directedness, options: OptionSet) -> None:
    """Add the axioms for one link breed.

    A link with its own variables is implemented as an intermediary class,
    with an inverse functional property from the 'from' turtle to it and a
    functional property from it to the 'to' turtle.
    """
    owns = list(owns)
    domain = naming.domain(link)
    range_ = naming.range(link)
    owl2 = options.has(OWL2_OPTION)
    link_prop = naming.prop(link)

    if not owns:
        add_link_property(axioms, naming, link, domain, range_)
    else:
        link_cls = link_class_name(link)
        logger.debug("Reifying link breed %s as class %s", link, link_cls)
        add_class_and_properties(axioms, naming, link_cls, owns)
        add_link_property(axioms, naming, reify_out(link), domain, link_cls, inverse_functional=True)
        add_link_property(axioms, naming, reify_in(link), link_cls, range_, functional=True)

        if owl2:
            chain = (naming.prop(reify_out(link)), naming.prop(reify_in(link)))
            axioms.add(SubPropertyChainOf(chain, link_prop))
            # domain and range of a chain's superproperty are not inferred
            if domain is not None:
                axioms.add(ObjectPropertyDomain(link_prop, naming.cls(domain)))
            if range_ is not None:
                axioms.add(ObjectPropertyRange(link_prop, naming.cls(range_)))

    if options.has(RELATIONS_OPTION) and (not owns or owl2):
        if owl2:
            axioms.add(PropertyCharacteristic(link_prop, IRREFLEXIVE))
        if directedness is Directedness.DIRECTED:
            if owl2:
                axioms.add(PropertyCharacteristic(link_prop, ASYMMETRIC))
        elif directedness is Directedness.UNDIRECTED:
            axioms.add(PropertyCharacteristic(link_prop, SYMMETRIC))
        else:
            logger.info("No %s links exist; directedness not asserted", link)
            axioms.add(AnnotationAssertion(link_prop, RDFS.comment, Literal(NO_MEMBERS_COMMENT)))


def global_axioms(world, naming: NamingPolicy) -> set[Axiom]:
    """A data property per global; its only subject is the global individual."""
    return {Declaration(naming.prop(g), OWL.DatatypeProperty) for g in world.globals()}


def structure_axioms(session, world) -> set[Axiom]:
    """All the axioms of the structure ontology for `world`."""
    if session is None or world is None:
        raise InitializationFault("Bug: structure build invoked without a session or world")
    session.require_model()
    naming = session.naming
    options = session.options

    axioms: set[Axiom] = set()
    axioms |= breed_axioms(world, naming)
    axioms |= patch_axioms(world, naming, options)
    axioms |= link_axioms(world, naming, options)
    axioms |= global_axioms(world, naming)
    logger.info("Built %d structure axioms for %s", len(axioms), session.model_iri)
    return axioms
