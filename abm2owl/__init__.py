"""
abm2owl
-------

Translate the structure and state of an agent-based model (NetLogo-style
breeds, links, patches and globals) into OWL ontologies built with rdflib.

How to use
==========

from abm2owl import Session, World, write_structure, write_state

world = World.from_dict(snapshot)
session = Session()
session.configure(["owl2", "relations"])
session.declare_domain("eats", "cow", world)
session.set_model("http://example.org/farm.owl")

write_structure(session, world, "farm.owl")
write_state(session, world, "farm-3.owl", tick=3)
"""

from abm2owl.build import write_state, write_structure
from abm2owl.errors import (
    Abm2OwlError,
    BackendFault,
    ConfigError,
    InitializationFault,
    SequencingError,
)
from abm2owl.naming import EntityType, NamingPolicy
from abm2owl.options import NO_OPTIONS, NO_PATCHES_OPTION, OWL2_OPTION, RELATIONS_OPTION, OptionSet
from abm2owl.session import Session
from abm2owl.state import state_axioms, state_ontology_iri
from abm2owl.structure import infer_directedness, structure_axioms
from abm2owl.world import World, load_world

__all__ = [
    "Abm2OwlError",
    "BackendFault",
    "ConfigError",
    "EntityType",
    "InitializationFault",
    "NO_OPTIONS",
    "NO_PATCHES_OPTION",
    "NamingPolicy",
    "OWL2_OPTION",
    "OptionSet",
    "RELATIONS_OPTION",
    "SequencingError",
    "Session",
    "World",
    "infer_directedness",
    "load_world",
    "state_axioms",
    "state_ontology_iri",
    "structure_axioms",
    "write_state",
    "write_structure",
]
