"""FastAPI application exposing layout and edge validation."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from ..config import get_cycle_guard_mode, get_visibility_config, load_graph_config
from ..constants import CYCLE_GUARD_MODES
from ..errors import TodoGraphError
from ..filters import VisibilityFilter, filter_tasks
from ..graph import build_graph, project, validate_edge
from ..interaction import AddDependency
from ..models import TaskRecord
from .models import (
    LayoutRequest,
    LayoutResponse,
    TaskRecordIn,
    ValidateEdgeRequest,
    ValidateEdgeResponse,
)


def _records(tasks: list[TaskRecordIn]) -> list[TaskRecord]:
    return [task.to_record() for task in tasks]


def create_app(
    project_dir: Optional[Path] = None,
    enable_cors: bool = True,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        project_dir: Directory whose `.todo_graph/config.yaml` supplies defaults.
        enable_cors: Whether to enable CORS.

    Returns:
        Configured FastAPI app.
    """
    app = FastAPI(
        title="Todo Graph",
        description="Layered layout and cycle guard for task dependency graphs",
        version="0.1.0",
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    config, err = load_graph_config(project_dir or Path.cwd())
    if err:
        logger.warning("Ignoring unreadable config: {}", err)
    app.state.config = config

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "name": "Todo Graph",
            "version": "0.1.0",
            "status": "running",
        }

    @app.post("/api/graph/layout", response_model=LayoutResponse)
    async def layout(body: LayoutRequest) -> LayoutResponse:
        """Lay out a task batch and return render records."""
        if body.visibility is None:
            visibility = get_visibility_config(app.state.config)
        else:
            try:
                visibility = VisibilityFilter(body.visibility)
            except ValueError:
                raise HTTPException(status_code=422, detail=f"Unknown visibility: {body.visibility}")

        try:
            graph = build_graph(filter_tasks(_records(body.tasks), visibility))
        except TodoGraphError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        model = project(graph).to_dict()
        return LayoutResponse(nodes=model["nodes"], edges=model["edges"])

    @app.post("/api/graph/edges/validate", response_model=ValidateEdgeResponse)
    async def validate(body: ValidateEdgeRequest) -> ValidateEdgeResponse:
        """Check a proposed dependency against the cycle guard."""
        mode = body.guard_mode or get_cycle_guard_mode(app.state.config)
        if mode not in CYCLE_GUARD_MODES:
            raise HTTPException(status_code=422, detail=f"Unknown guard mode: {mode}")

        try:
            graph = build_graph(_records(body.tasks))
            decision = validate_edge(graph, body.source, body.target, mode=mode)
        except TodoGraphError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

        command = None
        if decision.accepted:
            command = AddDependency(from_id=body.source, to_id=body.target).to_dict()
        return ValidateEdgeResponse(
            accepted=decision.accepted,
            reason=decision.reason.value if decision.reason else None,
            command=command,
        )

    return app
