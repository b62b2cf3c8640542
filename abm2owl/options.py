"""
Options controlling which optional axiom families are emitted.

  "owl2"       -- include OWL 2 assertions (asymmetric/irreflexive properties,
                  property chains for reified links)
  "relations"  -- include relational attribute assertions (symmetric, ...)
  "no-patches" -- suppress spatial assertions (patches, location, x/y)
  "none"       -- none of the above (the default)

Each call to OptionSet.set() replaces the previous configuration.
"""

from typing import Iterable

from abm2owl.errors import ConfigError

OWL2_OPTION = "owl2"
RELATIONS_OPTION = "relations"
NO_PATCHES_OPTION = "no-patches"
NO_OPTIONS = "none"

VALID_OPTIONS = frozenset({OWL2_OPTION, RELATIONS_OPTION, NO_PATCHES_OPTION, NO_OPTIONS})


class OptionSet:
    def __init__(self, flags: Iterable[str] = ()):
        self._options: frozenset[str] = frozenset()
        self.set(flags)

    def set(self, flags: Iterable[str]) -> None:
        """Validate `flags` and replace the current options with them.

        Raises ConfigError for an unknown flag, a flag given twice, or "none"
        combined with anything else. The current options are left untouched
        when validation fails.
        """
        seen: set[str] = set()
        for flag in flags:
            if flag not in VALID_OPTIONS:
                raise ConfigError(
                    f'Invalid option: "{flag}". Each option must be one of: {sorted(VALID_OPTIONS)}'
                )
            if flag in seen:
                raise ConfigError(f'Option "{flag}" specified (at least) twice')
            seen.add(flag)

        if NO_OPTIONS in seen:
            if len(seen) > 1:
                raise ConfigError(f'Can\'t have option "{NO_OPTIONS}" and other options')
            seen.discard(NO_OPTIONS)

        self._options = frozenset(seen)

    def has(self, flag: str) -> bool:
        if flag == NO_OPTIONS or flag not in VALID_OPTIONS:
            # use no_options() to test for the sentinel
            raise ValueError(f"Not a testable option: {flag!r}")
        return flag in self._options

    def no_options(self) -> bool:
        return not self._options

    def __iter__(self):
        return iter(sorted(self._options))

    def __repr__(self):
        return f"OptionSet({sorted(self._options)!r})"
