"""Logging utilities for Fontgarden."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class OperationStats:
    """Statistics from an import or export run."""

    glyphs_imported: int = 0
    glyphs_exported: int = 0
    documents_read: int = 0
    documents_written: int = 0
    sets_touched: set[str] = field(default_factory=set)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("fontgarden")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking import/export progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def start(self) -> None:
        self._stats.start_time = time.time()

    def finish(self) -> None:
        self._stats.end_time = time.time()

    def log_document_read(self, path: Path, source_name: str) -> None:
        """Log a font document read for import."""
        self._logger.info("Document read", path=str(path), source=source_name)
        self._stats.documents_read += 1

    def log_import(self, routing: dict[str, set[str]], source_name: str) -> None:
        """Log where the glyphs of one import call were routed."""
        for set_name, glyph_names in sorted(routing.items()):
            self._logger.info(
                "Glyphs imported",
                set=set_name,
                source=source_name,
                count=len(glyph_names),
            )
            self._stats.glyphs_imported += len(glyph_names)
            self._stats.sets_touched.add(set_name)

    def log_document_written(self, path: Path, source_name: str, glyph_count: int) -> None:
        """Log a font document written by export."""
        self._logger.info(
            "Document written",
            path=str(path),
            source=source_name,
            glyphs=glyph_count,
        )
        self._stats.documents_written += 1
        self._stats.glyphs_exported += glyph_count

    def log_error(self, error: Exception) -> None:
        """Log a failed operation."""
        self._logger.error(
            "Operation failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
