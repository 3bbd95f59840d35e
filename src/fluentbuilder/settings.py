"""Process-wide configuration for fluentbuilder.

Settings are read once from the environment and then treated as read-only.
Callers that need different behaviour for a single description pass their own
:class:`Settings` instance to :func:`~fluentbuilder.descriptor_factory.describe`.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

__all__ = ["Settings", "get_settings"]

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    Configuration for describing target types.

    Attributes:
        terminal_operation: Name of the capability operation that constructs the target.
        nested_capability_name: Name of the class attribute on a target type that holds
            its capability interface, when no explicit linkage is declared.
        warn_on_type_mismatch: If True, log a warning when a setter's parameter annotation
            disagrees with the declared type of the field it sets.
    """

    terminal_operation: str = "build"
    nested_capability_name: str = "Builder"
    warn_on_type_mismatch: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            terminal_operation=os.getenv("FLUENTBUILDER_TERMINAL_OPERATION", "build"),
            nested_capability_name=os.getenv("FLUENTBUILDER_NESTED_CAPABILITY", "Builder"),
            warn_on_type_mismatch=os.getenv(
                "FLUENTBUILDER_WARN_ON_TYPE_MISMATCH", "true"
            ).strip().lower() not in _FALSE_VALUES,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded from the environment on first use."""
    return Settings.from_env()
