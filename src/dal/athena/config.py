from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from common.config.env import get_env_bool, get_env_float, get_env_int, get_env_str

DEFAULT_CATALOG = "AwsDataCatalog"
DEFAULT_WORKGROUP = "primary"
DEFAULT_RESULT_REUSE_MAX_AGE_MINUTES = 60
DEFAULT_POLL_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class ResultReuseConfig:
    """Whether Athena may serve a query from a previous execution's results."""

    enabled: bool = True
    max_age_minutes: Optional[int] = DEFAULT_RESULT_REUSE_MAX_AGE_MINUTES

    def to_request(self) -> Dict[str, Any]:
        """Render the ``ResultReuseConfiguration`` request payload."""
        by_age: Dict[str, Any] = {"Enabled": self.enabled}
        if self.max_age_minutes is not None:
            by_age["MaxAgeInMinutes"] = self.max_age_minutes
        return {"ResultReuseByAgeConfiguration": by_age}


@dataclass(frozen=True)
class AthenaQueryConfig:
    """Per-client query context, shared read-only by every query of one client."""

    database: str
    catalog: str = DEFAULT_CATALOG
    workgroup: str = DEFAULT_WORKGROUP
    result_reuse: ResultReuseConfig = field(default_factory=ResultReuseConfig)
    region: Optional[str] = None
    output_location: Optional[str] = None
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS

    def __post_init__(self) -> None:
        if not self.database:
            raise ValueError("Athena query config requires a database.")
        # Empty overrides fall back to the defaults.
        if not self.workgroup:
            object.__setattr__(self, "workgroup", DEFAULT_WORKGROUP)
        if not self.catalog:
            object.__setattr__(self, "catalog", DEFAULT_CATALOG)
        if self.result_reuse is None:
            object.__setattr__(self, "result_reuse", ResultReuseConfig())
        if self.poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds must be non-negative.")

    @classmethod
    def from_env(cls) -> "AthenaQueryConfig":
        """Load Athena config from environment variables."""
        database = get_env_str("ATHENA_DATABASE")
        if not database:
            raise ValueError(
                "Athena query client missing required config: ATHENA_DATABASE. "
                "Set ATHENA_DATABASE (and optionally ATHENA_CATALOG, ATHENA_WORKGROUP)."
            )

        # Set but empty means no age limit.
        max_age_minutes: Optional[int] = None
        if (get_env_str("ATHENA_RESULT_REUSE_MAX_AGE_MINUTES", "0") or "").strip():
            max_age_minutes = get_env_int(
                "ATHENA_RESULT_REUSE_MAX_AGE_MINUTES", DEFAULT_RESULT_REUSE_MAX_AGE_MINUTES
            )

        result_reuse = ResultReuseConfig(
            enabled=get_env_bool("ATHENA_RESULT_REUSE_ENABLED", True),
            max_age_minutes=max_age_minutes,
        )

        return cls(
            database=database,
            catalog=get_env_str("ATHENA_CATALOG", DEFAULT_CATALOG),
            workgroup=get_env_str("ATHENA_WORKGROUP", DEFAULT_WORKGROUP),
            result_reuse=result_reuse,
            region=get_env_str("AWS_REGION"),
            output_location=get_env_str("ATHENA_OUTPUT_LOCATION") or None,
            poll_interval_seconds=get_env_float(
                "ATHENA_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS
            ),
        )
