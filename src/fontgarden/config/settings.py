"""Configuration settings for Fontgarden."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class CyclePolicy(str, Enum):
    """What to do when a composite glyph references itself."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


class StorageConfig(BaseModel):
    """File and directory names of the on-disk layout.

    The defaults are the layout every Fontgarden reader expects; they are
    configurable for tests and tooling, not for interchange.
    """

    set_prefix: str = Field(default="set.", description="Prefix of set directories")
    source_prefix: str = Field(
        default="source.",
        description="Prefix of source directories",
    )
    default_layer_dir: str = Field(
        default="glyphs",
        description="Directory name of a source's default layer",
    )
    glyph_data_file: str = Field(
        default="glyph_data.csv",
        description="Per-set glyph metadata table",
    )
    color_marks_file: str = Field(
        default="color_marks.csv",
        description="Per-layer color annotation table",
    )
    layer_info_file: str = Field(
        default="layerinfo.plist",
        description="Per-layer file holding the logical layer name",
    )
    glyph_suffix: str = Field(default=".glif", description="Glyph file suffix")

    @property
    def layer_dir_prefix(self) -> str:
        return f"{self.default_layer_dir}."


class ImportConfig(BaseModel):
    """Configuration for importing font documents."""

    default_set_name: str = Field(
        default="default",
        description="Set that receives glyphs not claimed by an existing set",
    )


class ClosureConfig(BaseModel):
    """Configuration for composite closure."""

    cycle_policy: CyclePolicy = Field(
        default=CyclePolicy.IGNORE,
        description="Handling of cyclic component references",
    )


class ExportConfig(BaseModel):
    """Configuration for exporting font documents."""

    document_extension: str = Field(
        default="ufo",
        description="Extension of written font documents",
    )
    embed_glyph_data: bool = Field(
        default=True,
        description="Write glyph metadata back into each document's lib",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    quiet: bool = Field(
        default=False,
        description="Minimal console output",
    )


class FontgardenSettings(BaseModel):
    """Main application settings."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    importing: ImportConfig = Field(default_factory=ImportConfig)
    closure: ClosureConfig = Field(default_factory=ClosureConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FontgardenSettings:
    """Get default application settings."""
    return FontgardenSettings()
