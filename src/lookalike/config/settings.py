"""Configuration settings for Lookalike."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Reduced GF Latin Core: letters, digits and ASCII punctuation
DEFAULT_TEST_STRING = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "1234567890"
    "!?#$%&'()*+,-./:;<=>[\\]^_{|}"
)

REFERENCE_UPM = 1000


class RulesOfSimilarity(BaseModel):
    """Thresholds deciding when two letterforms count as the same.

    All values are specified at a reference UPM of 1000 and are scaled
    proportionally for fonts with different UPM values. equivalence is
    assumed to be no larger than error.
    """

    model_config = ConfigDict(frozen=True)

    equivalence: float = Field(
        default=2.0,
        ge=0.0,
        description="Separation at or below which two points count as identical",
    )
    budget: float = Field(
        default=100.0,
        ge=0.0,
        description="Allowance for the sum of squared separations above equivalence",
    )
    error: float = Field(
        default=25.0,
        ge=0.0,
        description="Separation above which a single point fails the comparison",
    )

    def scaled_for(self, upem: int) -> "RulesOfSimilarity":
        """Scale all thresholds for the given UPM.

        Args:
            upem: The units per em the letterforms are drawn at

        Returns:
            These rules when upem is the reference UPM, else a scaled copy
        """
        if upem == REFERENCE_UPM:
            return self
        scale = upem / REFERENCE_UPM
        return RulesOfSimilarity(
            equivalence=self.equivalence * scale,
            budget=self.budget * scale,
            error=self.error * scale,
        )

    def for_upem(self, upem: int) -> "RulesOfSimilarity":
        """Alias of scaled_for."""
        return self.scaled_for(upem)


class ComparisonConfig(BaseModel):
    """Configuration for a comparison run."""

    match_pct: float = Field(
        default=80.0,
        ge=0.0,
        le=100.0,
        description="Percentage of test characters that must match for fonts to match",
    )
    test_string: str = Field(
        default=DEFAULT_TEST_STRING,
        description="Characters compared to detect duplication",
    )
    test_nam: Path | None = Field(
        default=None,
        description=".nam file used as the source of test characters, overrides test_string",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = compare in-process)",
    )
    dump_glyphs: bool = Field(
        default=False,
        description="Write an SVG per test character showing every variant",
    )
    dump_groups: bool = Field(
        default=False,
        description="Write the sets of files and their common characters",
    )
    working_dir: Path = Field(
        default=Path("build"),
        description="Where diagnostic files are written",
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


class LookalikeSettings(BaseModel):
    """Main application settings."""

    rules: RulesOfSimilarity = Field(default_factory=RulesOfSimilarity)
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> LookalikeSettings:
    """Get default application settings."""
    return LookalikeSettings()
