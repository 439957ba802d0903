"""Service context.

Services receive their collaborators (logger, settings) through a
``ServiceContext`` built by the caller instead of reaching for module-level
globals. The API layer builds one per process; tests build their own.
"""

from dataclasses import dataclass, field

from hospeda.core.config import Settings, get_settings
from hospeda.core.logging import ServiceLogger, get_logger


@dataclass(frozen=True)
class ServiceContext:
    """Collaborators shared by the services of one caller.

    Attributes:
        logger: Structured service logger.
        settings: Application settings.
    """

    logger: ServiceLogger = field(default_factory=ServiceLogger)
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def default(cls, name: str = "hospeda.services") -> "ServiceContext":
        """Build a context with a logger bound to ``name``."""
        return cls(logger=ServiceLogger(get_logger(name)), settings=get_settings())
