#!/usr/bin/env python3
"""
Command line front end.

Structure (T-box) ontology of a model snapshot:
  abm2owl structure farm.json -m http://example.org/farm.owl -o farm.owl \
      --options owl2 relations --domain eats cow --range eats grass

State (A-box) ontology of the same snapshot at tick 3:
  abm2owl state farm.json -m http://example.org/farm.owl -o farm-3.owl --tick 3

The JSON snapshot layout is described in abm2owl.world.
"""

import argparse
import logging
import sys
from pathlib import Path

from abm2owl.build import write_state, write_structure
from abm2owl.errors import Abm2OwlError, BackendFault, InitializationFault
from abm2owl.session import Session
from abm2owl.world import load_world


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("world", help="Path to the JSON model snapshot")
    parser.add_argument("-m", "--model", required=True, help="IRI of the structure ontology")
    parser.add_argument("-o", "--output", required=True, help="Output ontology file")
    parser.add_argument(
        "--options", nargs="+", default=[],
        help='Any of "owl2", "relations", "no-patches", or "none"'
    )
    parser.add_argument(
        "--domain", nargs=2, action="append", default=[], metavar=("LINK", "BREED"),
        help="Declare BREED as the domain of link breed LINK (repeatable)"
    )
    parser.add_argument(
        "--range", nargs=2, action="append", default=[], metavar=("LINK", "BREED"),
        help="Declare BREED as the range of link breed LINK (repeatable)"
    )
    parser.add_argument("--format", help="rdflib serialization format. Default: from the output suffix")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log build details")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abm2owl",
        description="Translate an agent-based model snapshot into OWL ontologies."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    structure = sub.add_parser("structure", help="Build the structure (T-box) ontology")
    _add_common(structure)
    structure.add_argument(
        "--import", dest="imports", action="append", default=[], metavar="IRI",
        help="Ontology IRI the structure ontology imports (repeatable)"
    )

    state = sub.add_parser("state", help="Build a state (A-box) ontology")
    _add_common(state)
    state.add_argument("--tick", type=float, required=True, help="Time of the snapshot")
    return parser


def make_session(args, world) -> Session:
    session = Session()
    session.configure(args.options)
    for link, breed in args.domain:
        session.declare_domain(link, breed, world)
    for link, breed in args.range:
        session.declare_range(link, breed, world)
    for iri in getattr(args, "imports", []):
        session.add_import(iri)
    session.set_model(args.model)
    return session


def main_cli(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    in_path = Path(args.world)
    if not in_path.exists():
        print(f"Input file not found: {in_path}", file=sys.stderr)
        return 1

    try:
        world = load_world(in_path.as_posix())
        session = make_session(args, world)
        if args.command == "structure":
            ontology = write_structure(session, world, args.output, args.format)
        else:
            ontology = write_state(session, world, args.output, args.tick, args.format)
    except InitializationFault as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return 5
    except BackendFault as e:
        print(f"Ontology error: {e}", file=sys.stderr)
        return 4
    except Abm2OwlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"Ontology: {ontology.iri}")
    print(f"Axioms:   {ontology.axiom_count}")
    print(f"Wrote: {args.output}")
    return 0


def main():
    sys.exit(main_cli())


if __name__ == "__main__":
    main()
