"""
Session: everything a build needs that is set up before the first build.

  - options (replaceable at any time)
  - domain/range overrides for links (only before the model IRI)
  - imports of the structure ontology
  - the model IRI (exactly once)

Builders receive the session explicitly and only read from it.
"""

import logging
from typing import Iterable

from abm2owl.errors import ConfigError, SequencingError
from abm2owl.naming import NamingPolicy
from abm2owl.options import OptionSet
from abm2owl.structure import LOCATION_PROPERTY
from abm2owl.world import DEFAULT_LINK_KIND, DEFAULT_TURTLE_KIND

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, options: Iterable[str] = ()):
        self.options = OptionSet(options)
        self.imports: list[str] = []
        self._model_iri: str | None = None
        self._domains: dict[str, str] = {}
        self._ranges: dict[str, str] = {}
        self._naming: NamingPolicy | None = None

    # --------------------
    # Options
    # --------------------
    def configure(self, flags: Iterable[str]) -> None:
        """Replace the current options (see abm2owl.options)."""
        self.options.set(list(flags))
        logger.debug("Options set to %s", list(self.options) or ["none"])

    # --------------------
    # Model IRI
    # --------------------
    @property
    def model_iri(self) -> str | None:
        return self._model_iri

    def set_model(self, iri: str) -> None:
        if self._model_iri is not None:
            raise SequencingError(
                f'You may not set the model IRI more than once (already "{self._model_iri}")'
            )
        if not iri:
            raise ConfigError("The model IRI must not be empty")
        self._model_iri = str(iri)
        self._naming = NamingPolicy(self._model_iri, self._domains, self._ranges)

    def require_model(self) -> str:
        if self._model_iri is None:
            raise SequencingError("You must set the model IRI before building an ontology")
        return self._model_iri

    @property
    def naming(self) -> NamingPolicy:
        self.require_model()
        return self._naming

    # --------------------
    # Overrides
    # --------------------
    def declare_domain(self, relation: str, breed: str, world=None) -> None:
        """Declare `breed` as the domain of the link breed (or location) `relation`."""
        self._declare(self._domains, "domain", relation, breed, world)

    def declare_range(self, relation: str, breed: str, world=None) -> None:
        """Declare `breed` as the range of the link breed `relation`."""
        self._declare(self._ranges, "range", relation, breed, world)

    def _declare(self, registry: dict, what: str, relation: str, breed: str, world) -> None:
        if self._model_iri is not None:
            raise SequencingError(f"You must declare the {what} of \"{relation}\" before setting the model IRI")

        key = relation.lower()
        if world is not None:
            key, breed = _check_override(world, what, relation, breed)

        if key in registry:
            raise ConfigError(f'The {what} of "{relation}" is already declared as "{registry[key]}"')
        registry[key] = breed
        logger.debug("Declared %s of %s: %s", what, key, breed)

    # --------------------
    # Imports
    # --------------------
    def add_import(self, iri: str) -> None:
        if iri not in self.imports:
            self.imports.append(iri)


def _check_override(world, what: str, relation: str, breed: str) -> tuple[str, str]:
    """Validate an override against `world`; return the names to record."""
    if relation.lower() == LOCATION_PROPERTY:
        if what != "domain":
            raise ConfigError(f'The range of "{LOCATION_PROPERTY}" is always the patch class')
        key = LOCATION_PROPERTY
    else:
        link_kinds = world.link_breeds()
        if link_kinds:
            matches = [k for k in link_kinds if k.matches(relation)]
            if not matches:
                raise ConfigError(f'No such link breed as "{relation}"')
            key = matches[0].label.lower()
        elif relation.lower() in ("links", DEFAULT_LINK_KIND):
            key = DEFAULT_LINK_KIND
        else:
            raise ConfigError(f'No such link breed as "{relation}"')

    breed_kinds = world.breeds()
    if breed_kinds:
        matches = [k for k in breed_kinds if k.matches(breed)]
        if not matches:
            raise ConfigError(f'No such breed as "{breed}"')
        breed = matches[0].label
    elif breed.lower() in ("turtles", DEFAULT_TURTLE_KIND.lower()):
        breed = DEFAULT_TURTLE_KIND
    else:
        raise ConfigError(f'No such breed as "{breed}"')
    return key, breed
