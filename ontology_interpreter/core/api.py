#!/usr/bin/env python3
"""
FastAPI Server for Ontology Interpretation
REST API that interprets RDF/OWL files and reports the built ontologies
"""

from fastapi import FastAPI, HTTPException
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Dict, Any, List, Optional

from .config import get_config, InterpreterSettings
from .domain import Ontology
from .exceptions import InstanceBuildError, OntologyFileError, OntologyFileNotFoundError
from .interpreter import Interpreter
from .logger import get_logger
from .models import InterpretRequest, OntologySummary
from .prefix import preferring

# Global state, populated at startup
settings: Optional[InterpreterSettings] = None
data_root: Optional[Path] = None
ontologies: Dict[str, OntologySummary] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global settings, data_root

    logger = get_logger()
    logger.info("Starting Ontology Interpreter Server...")

    config = get_config()
    settings = config.get_interpreter_settings()
    data_root = Path(config.get_data_config().get('root', 'data'))

    logger.info(f"Data root: {data_root}")
    yield

    logger.info("Shutting down Ontology Interpreter Server...")
    ontologies.clear()


app = FastAPI(
    title="Ontology Interpreter API",
    description="Interpret RDF/OWL files into typed instance graphs",
    version="1.0.0",
    lifespan=lifespan
)


def _resolve_path(file_path: str) -> Path:
    path = Path(file_path)
    if not path.is_absolute() and data_root is not None:
        path = data_root / path
    return path


@app.get("/", response_model=Dict[str, str])
async def root():
    """Root endpoint."""
    return {
        "message": "Ontology Interpreter API",
        "docs": "/docs",
        "health": "/health"
    }


@app.post("/interpret", response_model=OntologySummary)
def interpret(request: InterpretRequest):
    """
    Interpret an ontology file.

    Without a default prefix in the file, ``preferred_uri`` is used when it is
    one of the declared namespaces; otherwise the first namespace in
    lexicographic order is chosen.
    """
    if settings is None:
        raise HTTPException(status_code=503, detail="Server not initialized")

    path = _resolve_path(request.file_path)
    interpreter = Interpreter(
        path,
        preferring(request.preferred_uri),
        settings=settings,
        max_workers=request.max_workers
    )

    try:
        ontology: Ontology = interpreter.build_ontology()
    except OntologyFileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OntologyFileError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except InstanceBuildError as e:
        get_logger().error(f"Interpretation of {path} failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    summary = OntologySummary.from_ontology(ontology, interpreter.warnings)
    ontologies[ontology.name] = summary
    return summary


@app.get("/ontologies", response_model=List[str])
async def list_ontologies():
    """Names of the ontologies interpreted since startup."""
    return sorted(ontologies)


@app.get("/ontologies/{name}", response_model=OntologySummary)
async def get_ontology(name: str):
    """Summary of a previously interpreted ontology."""
    summary = ontologies.get(name)
    if summary is None:
        raise HTTPException(status_code=404, detail=f"Ontology '{name}' not found")
    return summary


@app.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {"status": "healthy", "ready": settings is not None}
