"""
Engine registry for PDFText-Bench.

The registry is the ordered, read-only set of engines benchmarked in one
run. Its order is the catalogue declaration order and is used everywhere
results are listed.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Type

from .engines.base import ExtractionEngine
from .engines.pdfminer_engine import PdfminerEngine
from .engines.pdfplumber_engine import PDFPlumberEngine
from .engines.pdftotext_engine import PdftotextEngine
from .engines.pymupdf_engine import PyMuPDFEngine
from .engines.pypdf_engine import PyPDFEngine
from .engines.pypdfium2_engine import PyPdfium2Engine
from .errors import ConfigurationError
from .schema import EngineId

logger = logging.getLogger(__name__)

# Declaration order is the canonical report order
ENGINE_CATALOGUE: Tuple[Type[ExtractionEngine], ...] = (
    PDFPlumberEngine,
    PyMuPDFEngine,
    PyPDFEngine,
    PdfminerEngine,
    PyPdfium2Engine,
    PdftotextEngine,
)


def catalogue_ids() -> List[EngineId]:
    """Engine ids known to this build, in declaration order."""
    return [engine_cls.engine_id for engine_cls in ENGINE_CATALOGUE]


class EngineRegistry:
    """Immutable ordered collection of engines, unique by engine id."""

    def __init__(
        self,
        engines: Iterable[ExtractionEngine] = (),
        disabled: Iterable[EngineId] = ()
    ):
        """
        Initialize registry.

        Args:
            engines: Engines in benchmark order; later duplicates of an id are dropped
            disabled: Ids of engines left out because they are not available
        """
        unique: Dict[EngineId, ExtractionEngine] = {}
        for engine in engines:
            if not engine.engine_id:
                raise ConfigurationError(f"Engine {engine!r} has no engine_id")
            if engine.engine_id in unique:
                logger.warning(f"Duplicate engine id {engine.engine_id!r} ignored")
                continue
            unique[engine.engine_id] = engine

        self._engines: Tuple[ExtractionEngine, ...] = tuple(unique.values())
        self._disabled: Tuple[EngineId, ...] = tuple(disabled)

    def __iter__(self) -> Iterator[ExtractionEngine]:
        return iter(self._engines)

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, engine_id: object) -> bool:
        return any(engine.engine_id == engine_id for engine in self._engines)

    @property
    def ids(self) -> List[EngineId]:
        return [engine.engine_id for engine in self._engines]

    @property
    def disabled(self) -> List[EngineId]:
        return list(self._disabled)

    def get(self, engine_id: EngineId) -> ExtractionEngine:
        for engine in self._engines:
            if engine.engine_id == engine_id:
                return engine
        raise KeyError(engine_id)

    def __repr__(self) -> str:
        return f"EngineRegistry(engines={self.ids}, disabled={self.disabled})"


def build_registry(
    selected: Optional[Iterable[EngineId]] = None,
    include_unavailable: bool = False,
    engine_options: Optional[Dict[EngineId, Dict[str, Any]]] = None
) -> EngineRegistry:
    """
    Build the registry from the engine catalogue.

    Args:
        selected: Engine ids to include (catalogue order is kept), None for all
        include_unavailable: Keep engines whose library is missing; they then
            report NativeLibraryUnavailable for every file
        engine_options: Constructor keyword arguments per engine id

    Returns:
        EngineRegistry

    Raises:
        ConfigurationError: An unknown engine id was selected
    """
    known = catalogue_ids()
    engine_options = engine_options or {}

    if selected is not None:
        selected = list(selected)
        unknown = [engine_id for engine_id in selected if engine_id not in known]
        if unknown:
            raise ConfigurationError(
                f"Unknown engine(s): {', '.join(unknown)}",
                known=",".join(known)
            )

    engines = []
    disabled = []

    for engine_cls in ENGINE_CATALOGUE:
        engine_id = engine_cls.engine_id
        if selected is not None and engine_id not in selected:
            continue

        engine = engine_cls(**engine_options.get(engine_id, {}))

        if not engine.is_available() and not include_unavailable:
            logger.info(f"Engine {engine_id} not available, skipping")
            disabled.append(engine_id)
            continue

        engines.append(engine)

    registry = EngineRegistry(engines, disabled=disabled)
    logger.info(f"Engine registry: {registry.ids} (disabled: {registry.disabled})")
    return registry
