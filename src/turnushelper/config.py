"""Runtime configuration for report generation.

Defaults match the classic layout: a `turnus/` directory holding one file
per rotation schedule and a `fri.yml` file listing absences. Every value
can be overridden from the environment or from the command line.
"""

import os
from dataclasses import dataclass


@dataclass
class ReportConfig:
    """Configuration for loading data and building reports.

    Attributes:
        schedules_dir: Directory containing one schedule file per rotation.
        absences_path: File listing absence intervals.
        reference_hour: UTC hour of the instant used for absence lookups.
        missing_reason: Reason shown when an absence has none recorded.
        log_level: Logging level name.
    """

    schedules_dir: str = "turnus"
    absences_path: str = "fri.yml"
    reference_hour: int = 12  # Noon avoids midnight boundary ambiguity
    missing_reason: str = "no reason given"
    log_level: str = "INFO"

    def __post_init__(self):
        if not 0 <= self.reference_hour <= 23:
            raise ValueError(
                f"reference_hour must be between 0 and 23, got {self.reference_hour}"
            )

    @classmethod
    def from_env(cls) -> "ReportConfig":
        """Create a config from TURNUS_* environment variables."""
        defaults = cls()
        return cls(
            schedules_dir=os.getenv("TURNUS_SCHEDULES_DIR", defaults.schedules_dir),
            absences_path=os.getenv("TURNUS_ABSENCES", defaults.absences_path),
            reference_hour=int(
                os.getenv("TURNUS_REFERENCE_HOUR", str(defaults.reference_hour))
            ),
            missing_reason=os.getenv("TURNUS_MISSING_REASON", defaults.missing_reason),
            log_level=os.getenv("TURNUS_LOG_LEVEL", defaults.log_level).upper(),
        )
