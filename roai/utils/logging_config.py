"""Loguru sink setup for the engine and the CLI.

Every sink renders two extra fields, ``stage`` and ``run_id``. They default to
``"-"`` and are filled in by :func:`log_stage` for the duration of a block, so
records emitted deep inside the transformers still say which evaluation step
and which CLI session produced them.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger

from ..config.schemas import EngineConfig

TEXT_TIMESTAMP = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>"
TEXT_STAGE = "<cyan>{extra[stage]: <12}</cyan>"
TEXT_RUN_ID = "<magenta>{extra[run_id]: <8}</magenta>"


def _text_format(include_stage: bool, include_run_id: bool, include_timestamps: bool) -> str:
    parts = [TEXT_TIMESTAMP] if include_timestamps else []
    parts.append("<level>{level: <8}</level>")
    if include_stage:
        parts.append(TEXT_STAGE)
    if include_run_id:
        parts.append(TEXT_RUN_ID)
    parts.append("<level>{message}</level>")
    return " | ".join(parts)


def setup_logging(
    level: str = "INFO",
    format_type: str = "text",
    file_path: str | Path | None = None,
    max_file_size_mb: int = 100,
    backup_count: int = 5,
    include_stage: bool = True,
    include_run_id: bool = True,
    include_timestamps: bool = True,
) -> None:
    """Replace all loguru sinks with a stderr sink and an optional file sink.

    Stdout is left alone so ``roai evaluate --json`` output stays parseable.
    Unknown level names fall back to INFO with a warning.

    Args:
        level: Minimum level name
        format_type: "text" for the column layout, "json" for serialized records
        file_path: Optional log file, rotated at ``max_file_size_mb``
        max_file_size_mb: Rotation size for the file sink
        backup_count: Rotated files kept
        include_stage: Show the stage column in text output
        include_run_id: Show the run id column in text output
        include_timestamps: Show the timestamp column in text output
    """
    logger.remove()
    logger.configure(extra={"stage": "-", "run_id": "-"})

    level = level.upper()
    try:
        logger.level(level)
        safe_level = level
    except ValueError:
        safe_level = "INFO"

    serialize = format_type == "json"
    log_format = (
        "{message}"
        if serialize
        else _text_format(include_stage, include_run_id, include_timestamps)
    )

    logger.add(
        sys.stderr,
        level=safe_level,
        format=log_format,
        serialize=serialize,
        colorize=False if serialize else None,
    )

    if file_path:
        log_file_path = Path(file_path)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file_path,
            level=safe_level,
            format=log_format,
            serialize=serialize,
            colorize=False,
            rotation=f"{max_file_size_mb} MB",
            retention=backup_count,
            encoding="utf-8",
        )

    if safe_level != level:
        logger.warning(f"Invalid logging level '{level}' provided; falling back to 'INFO'")


def configure_logging_from_config(
    config: EngineConfig | None = None, level: str | None = None
) -> None:
    """Set up sinks from the ``logging`` section of an engine configuration.

    Args:
        config: Configuration to read; the cached ``get_config()`` when omitted
        level: Overrides ``config.logging.level`` (the CLI passes DEBUG for --verbose)
    """
    if config is None:
        from ..config.loader import get_config

        config = get_config()

    settings = config.logging
    setup_logging(
        level=level or settings.level,
        format_type=settings.format,
        file_path=settings.file_path,
        max_file_size_mb=settings.max_file_size_mb,
        backup_count=settings.backup_count,
        include_stage=settings.include_stage,
        include_run_id=settings.include_run_id,
        include_timestamps=settings.include_timestamps,
    )


@contextmanager
def log_stage(stage: str, run_id: str | None = None) -> Iterator[None]:
    """Tag every record emitted inside the block with a stage and run id.

    Uses ``logger.contextualize``, so the tags follow the current context
    (threads started inside the block do not inherit them).

    Example:
        >>> with log_stage("monte_carlo", run_id="a1b2c3d4"):
        ...     logger.info("simulating")
    """
    tags = {"stage": stage}
    if run_id is not None:
        tags["run_id"] = run_id
    with logger.contextualize(**tags):
        yield
