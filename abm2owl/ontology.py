"""
Ontology construction and persistence on top of an rdflib Graph.

The graph only receives axioms once a build has assembled all of them, and is
written to disk in one serialize() call.
"""

import logging
import os
from pathlib import Path
from typing import Iterable
from urllib.parse import urlparse

from rdflib import Graph, URIRef
from rdflib.namespace import OWL, RDF, RDFS, XSD
from rdflib.plugin import PluginException
from rdflib.util import guess_format

from abm2owl.axioms import Axiom
from abm2owl.errors import BackendFault
from abm2owl.naming import namespace_of

logger = logging.getLogger(__name__)

# --------------------
# Settings
# --------------------
DEFAULT_FORMAT = os.environ.get("ABM2OWL_FORMAT", "xml")  # RDF/XML, like most OWL tools


class Ontology:
    """An OWL ontology under construction.

    Args:
        iri: the ontology IRI (must be absolute)
        prefix: prefix bound to the ontology's namespace in the serialization
    """

    def __init__(self, iri: str, prefix: str = ""):
        if not iri or not urlparse(str(iri)).scheme:
            raise BackendFault(f'Cannot create OWL ontology "{iri}": not an absolute IRI')
        self.iri = URIRef(str(iri))
        self.graph = Graph()
        self.graph.bind("owl", OWL)
        self.graph.bind("rdf", RDF)
        self.graph.bind("rdfs", RDFS)
        self.graph.bind("xsd", XSD)
        self.graph.bind(prefix, namespace_of(self.iri))
        self.graph.add((self.iri, RDF.type, OWL.Ontology))
        self.axiom_count = 0

    def bind(self, prefix: str, namespace: str) -> None:
        self.graph.bind(prefix, namespace_of(namespace), replace=False)

    def add_import(self, iri: str) -> None:
        self.graph.add((self.iri, OWL.imports, URIRef(str(iri))))

    def add_axioms(self, axioms: Iterable[Axiom]) -> None:
        for axiom in axioms:
            axiom.add_to(self.graph)
            self.axiom_count += 1

    def save(self, destination: str, fmt: str | None = None) -> Path:
        """Serialize to `destination`; format from `fmt`, else the file suffix."""
        out = Path(destination)
        fmt = fmt or guess_format(out.as_posix()) or DEFAULT_FORMAT
        try:
            self.graph.serialize(destination=out.as_posix(), format=fmt)
        except (OSError, PluginException, ValueError) as e:
            raise BackendFault(f'Cannot save OWL ontology "{self.iri}" to "{destination}": {e}') from e
        logger.info("Saved %s (%d triples) to %s", self.iri, len(self.graph), out)
        return out
