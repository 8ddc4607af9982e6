"""
Pydantic models for PDFText-Bench results.
Every engine invocation is normalized to these models.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

EngineId = str


class ErrorKind(str, Enum):
    """Failure categories reported per engine."""
    MALFORMED_DOCUMENT = "MalformedDocument"
    UNSUPPORTED_FEATURE = "UnsupportedFeature"
    NATIVE_LIBRARY_UNAVAILABLE = "NativeLibraryUnavailable"
    CRASHED = "Crashed"
    TIMEOUT = "Timeout"
    INPUT_UNREADABLE = "InputUnreadable"
    UNKNOWN = "Unknown"


class ExtractionSuccess(BaseModel):
    """Successful extraction: output size and optional page count."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    status: Literal["success"] = "success"
    text_length: int = Field(..., ge=0, description="UTF-8 byte length of extracted text")
    page_count: Optional[int] = Field(None, ge=0, description="Page count if the engine reports one")


class ExtractionFailure(BaseModel):
    """Failed extraction. Carries no size information."""
    model_config = ConfigDict(frozen=True, extra='forbid')

    status: Literal["failure"] = "failure"
    error_kind: ErrorKind = Field(..., description="Failure category")
    message: str = Field("", description="Diagnostic message")


ExtractionOutcome = Annotated[
    Union[ExtractionSuccess, ExtractionFailure],
    Field(discriminator="status")
]


class BenchmarkResult(BaseModel):
    """Result of one (engine, file) invocation."""
    model_config = ConfigDict(frozen=True)

    engine: EngineId = Field(..., description="Engine identifier")
    file: Path = Field(..., description="Input file")
    duration: float = Field(..., ge=0, description="Extraction call duration in seconds")
    outcome: ExtractionOutcome = Field(..., description="Success or failure")

    @property
    def success(self) -> bool:
        return isinstance(self.outcome, ExtractionSuccess)

    @property
    def duration_ms(self) -> float:
        return self.duration * 1000.0


class FileResults(BaseModel):
    """All engine results for one input file, in registry order."""
    file: Path = Field(..., description="Input file")
    results: List[BenchmarkResult] = Field(default_factory=list, description="Per-engine results")

    @property
    def engines(self) -> List[EngineId]:
        return [result.engine for result in self.results]


class BatchReport(BaseModel):
    """All per-file results of one run, in discovery order."""
    input_path: Path = Field(..., description="Path given on the command line")
    engines: List[EngineId] = Field(default_factory=list, description="Registered engines in order")
    disabled_engines: List[EngineId] = Field(
        default_factory=list, description="Engines left out because their library is missing"
    )
    files: List[FileResults] = Field(default_factory=list, description="Per-file results")

    @property
    def files_processed(self) -> int:
        return len(self.files)
