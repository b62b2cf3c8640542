"""
End-to-end builds: assemble the axioms, create the ontology, save it.

Nothing is written unless every axiom of the build could be assembled.
"""

import logging

from abm2owl.errors import InitializationFault
from abm2owl.ontology import Ontology
from abm2owl.state import state_axioms
from abm2owl.structure import structure_axioms

logger = logging.getLogger(__name__)


def write_structure(session, world, destination: str, fmt: str | None = None) -> Ontology:
    """Build the structure ontology of `world` and save it to `destination`."""
    if session is None:
        raise InitializationFault("Bug: session not initialised")
    axioms = structure_axioms(session, world)

    ontology = Ontology(session.model_iri)
    for iri in session.imports:
        ontology.add_import(iri)
    ontology.add_axioms(axioms)
    ontology.save(destination, fmt)
    return ontology


def write_state(session, world, destination: str, tick: float, fmt: str | None = None) -> Ontology:
    """Build the state ontology of `world` at `tick` and save it to `destination`."""
    if session is None:
        raise InitializationFault("Bug: session not initialised")
    state_iri, axioms = state_axioms(session, world, tick)

    ontology = Ontology(state_iri)
    ontology.bind("model", session.model_iri)
    ontology.add_import(session.model_iri)
    ontology.add_axioms(axioms)
    ontology.save(destination, fmt)
    return ontology
