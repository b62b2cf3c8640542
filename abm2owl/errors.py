"""Errors raised while configuring a session or building an ontology.

Every error aborts the current build only. Nothing is persisted by a build
that raises, because the ontology is saved after all axioms are assembled.
"""


class Abm2OwlError(Exception):
    """Base class for all abm2owl errors."""


class InitializationFault(Abm2OwlError):
    """A builder was invoked before its session was wired up (integration bug)."""


class SequencingError(Abm2OwlError):
    """An operation was called before (or after) the step it depends on."""


class ConfigError(Abm2OwlError):
    """Invalid options, overrides, or an inconsistent model structure."""


class BackendFault(Abm2OwlError):
    """The ontology could not be created or saved. The cause is chained."""
