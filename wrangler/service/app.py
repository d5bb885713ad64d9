"""FastAPI application entrypoint for wrangler service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import ConfigError, PolishingConfig
from ..models import Finding, PatchBundle
from ..orchestrator import Orchestrator


class PolishSettings(BaseModel):
    toc_threshold: int = 4
    default_code_language: str = "bash"
    badges_enabled: bool = True
    runtime_version_label: str = "21"
    runtime_name: str = "JDK"
    primary_language: str = "java"
    diff_style: str = "minimal"

    def to_config(self) -> PolishingConfig:
        return PolishingConfig(**self.model_dump())


class PolishRequest(BaseModel):
    path: str
    config: Optional[PolishSettings] = None


class FindingModel(BaseModel):
    id: str
    message: str
    severity: str
    file: Optional[str] = None
    line_start: int
    line_end: int


class PolishResponse(BaseModel):
    path: Optional[str] = None
    has_changes: bool
    unified_diff: str
    summary: str
    flags: Dict[str, bool]
    findings: List[FindingModel]


class LintRequest(BaseModel):
    path: str


class LintResponse(BaseModel):
    findings: List[FindingModel]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _finding_model(finding: Finding) -> FindingModel:
    return FindingModel(**finding.to_dict())


def _polish_response(bundle: PatchBundle) -> PolishResponse:
    payload = bundle.to_dict()
    payload["findings"] = [_finding_model(finding) for finding in bundle.findings]
    return PolishResponse(**payload)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing wrangler operations."""

    app = FastAPI(title="README Wrangler Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh orchestrator per request so runs share no state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/polish", response_model=PolishResponse)
    async def polish_repo(
        payload: PolishRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> PolishResponse:
        config = payload.config.to_config() if payload.config is not None else None

        def _run_polish() -> PatchBundle:
            return orchestrator.run_polish(payload.path, config)

        loop = asyncio.get_running_loop()
        bundle = await loop.run_in_executor(None, _run_polish)
        return _polish_response(bundle)

    @app.post("/lint", response_model=LintResponse)
    async def lint_repo(
        payload: LintRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> LintResponse:
        def _run_lint() -> List[Finding]:
            return orchestrator.run_lint(payload.path)

        loop = asyncio.get_running_loop()
        findings = await loop.run_in_executor(None, _run_lint)
        return LintResponse(findings=[_finding_model(finding) for finding in findings])

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(
        _: Any, exc: NotADirectoryError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigError)
    async def config_error_handler(
        _: Any, exc: ConfigError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(
        _: Any, exc: ValueError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
