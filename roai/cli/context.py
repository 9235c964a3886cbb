"""CLI command context shared across commands."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from loguru import logger
from rich.console import Console

from ..config.schemas import EngineConfig


@dataclass
class CommandContext:
    """Shared context for CLI commands.

    Attributes:
        config: Engine configuration
        console: Rich console for formatted output
        run_id: Unique identifier for this CLI session
        logger: Loguru logger with context binding
    """

    config: EngineConfig
    console: Console
    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])

    def __post_init__(self) -> None:
        self.logger = logger.bind(
            component="cli",
            run_id=self.run_id,
            environment=self.config.environment,
        )

    @classmethod
    def create(cls, config: EngineConfig | None = None, run_id: str | None = None) -> CommandContext:
        """Create a CommandContext, loading configuration when none is given."""
        from ..config.loader import get_config

        if config is None:
            config = get_config()

        ctx_kwargs = {"config": config, "console": Console()}
        if run_id is not None:
            ctx_kwargs["run_id"] = run_id

        context = cls(**ctx_kwargs)
        context.logger.debug("CLI session started")
        return context
