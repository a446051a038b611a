"""Execution configuration passed explicitly to the dispatcher."""

import logging
from dataclasses import dataclass

from sqlchain.utils.logging import get_logger

__all__ = ("ExecutionConfig",)


@dataclass(slots=True)
class ExecutionConfig:
    """Controls statement logging around a single ``exec`` call."""

    log_statements: bool = False
    logger: "logging.Logger | None" = None
    log_level: int = logging.INFO

    def copy(self) -> "ExecutionConfig":
        """Return a copy to avoid sharing mutable state."""

        return ExecutionConfig(log_statements=self.log_statements, logger=self.logger, log_level=self.log_level)

    def resolve_logger(self) -> "logging.Logger":
        """Return the injected logger, or the driver logger when none was given."""

        return self.logger or get_logger("driver")

    @classmethod
    def merge(
        cls, base_config: "ExecutionConfig | None", override_config: "ExecutionConfig | None"
    ) -> "ExecutionConfig":
        """Overlay an override configuration on a base configuration.

        ``log_statements`` and ``log_level`` come from the override; the logger
        is taken from the override when it sets one.
        """

        if base_config is None and override_config is None:
            return cls()
        base = base_config.copy() if base_config else cls()
        if override_config is None:
            return base
        return cls(
            log_statements=override_config.log_statements,
            logger=override_config.logger or base.logger,
            log_level=override_config.log_level,
        )
