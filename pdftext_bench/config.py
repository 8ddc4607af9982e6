"""
Run configuration for PDFText-Bench.

Settings come from environment variables (optionally loaded from a .env file)
and are overridden by command-line flags.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .runner import Isolation
from .suite import InputMode

ENV_PREFIX = "PDFTEXT_BENCH_"


def load_env_file(env_path: Optional[Path] = None) -> None:
    """Load a .env file into the environment without overriding set variables."""
    if env_path is not None:
        load_dotenv(env_path)
    else:
        load_dotenv()


def parse_engine_list(value: Optional[str]) -> Optional[List[str]]:
    """Parse a comma-separated engine list; empty means all engines."""
    if value is None:
        return None
    engines = [e.strip() for e in value.split(',') if e.strip()]
    return engines or None


class BenchSettings(BaseModel):
    """Validated settings for one benchmark run."""

    timeout: Optional[float] = Field(None, gt=0, description="Per-engine timeout in seconds")
    isolation: Isolation = Field(Isolation.SUBPROCESS, description="Where engine calls run")
    input_mode: InputMode = Field(InputMode.BYTES, description="How documents are handed to engines")
    engines: Optional[List[str]] = Field(None, description="Engines to run, None for all")
    include_unavailable: bool = Field(False, description="Keep engines whose library is missing")
    require_engines: bool = Field(False, description="Fail when no engine is available")
    recursive: bool = Field(False, description="Walk input directories recursively")
    report_format: str = Field("text", description="Report format: text, md or json")
    pdftotext_path: str = Field("pdftotext", description="pdftotext executable")
    log_level: str = Field("WARNING", description="Logging level")
    log_file: Optional[Path] = Field(None, description="Optional log file")
    json_logs: bool = Field(False, description="Structured JSON log records")

    @field_validator('report_format')
    @classmethod
    def valid_report_format(cls, v):
        if v not in ('text', 'md', 'json'):
            raise ValueError(f"Unsupported report format: {v}")
        return v

    @field_validator('log_level')
    @classmethod
    def valid_log_level(cls, v):
        v = v.upper()
        if v not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            raise ValueError(f"Invalid log level: {v}")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BenchSettings":
        """
        Build settings from PDFTEXT_BENCH_* environment variables.

        Raises:
            ConfigurationError: A variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        def env(name: str) -> Optional[str]:
            value = environ.get(ENV_PREFIX + name)
            return value if value not in (None, "") else None

        if env("TIMEOUT") is not None:
            values['timeout'] = env("TIMEOUT")
        if env("ISOLATION") is not None:
            values['isolation'] = env("ISOLATION")
        if env("INPUT_MODE") is not None:
            values['input_mode'] = env("INPUT_MODE")
        if env("ENGINES") is not None:
            values['engines'] = parse_engine_list(env("ENGINES"))
        if env("PDFTOTEXT") is not None:
            values['pdftotext_path'] = env("PDFTOTEXT")
        if env("LOG_LEVEL") is not None:
            values['log_level'] = env("LOG_LEVEL")

        return cls._validated(values)

    def merged(self, **overrides: Any) -> "BenchSettings":
        """Copy with every non-None override applied and validated."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return self._validated(values)

    @classmethod
    def _validated(cls, values: Dict[str, Any]) -> "BenchSettings":
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def engine_options(self) -> Dict[str, Dict[str, Any]]:
        """Constructor options per engine id."""
        return {'pdftotext': {'executable': self.pdftotext_path}}
