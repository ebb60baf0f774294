from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, status

from ahaguide import get_version
from ahaguide.config import get_settings
from ahaguide.errors import InvalidQueryError
from ahaguide.mcp.service import GuidelineService
from ahaguide.models import DocumentInput, GuidelineDocument, QueryOutcome, QueryRequest


def create_app(service: GuidelineService | None = None) -> FastAPI:
    """JSON mirror of the MCP tools; builds its own service unless one is injected."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "service", None) is None:
            app.state.service = GuidelineService.from_settings(get_settings())
        yield

    app = FastAPI(title="aha-guidelines", version=get_version(), lifespan=lifespan)
    app.state.service = service

    def _service(request: Request) -> GuidelineService:
        return request.app.state.service

    @app.get("/healthz")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/query")
    async def query(payload: QueryRequest, request: Request) -> QueryOutcome:
        try:
            return _service(request).query(payload.query)
        except InvalidQueryError as exc:
            raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc)) from exc

    @app.post("/documents", status_code=status.HTTP_201_CREATED)
    async def add_document(payload: DocumentInput, request: Request) -> GuidelineDocument:
        try:
            return _service(request).add_document(payload)
        except ValueError as exc:
            raise HTTPException(status.HTTP_409_CONFLICT, str(exc)) from exc

    @app.get("/documents")
    async def list_documents(request: Request) -> list[GuidelineDocument]:
        return list(_service(request).list_documents())

    @app.get("/documents/{document_id}")
    async def get_document(document_id: str, request: Request) -> GuidelineDocument:
        doc = _service(request).get_document(document_id)
        if doc is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, f"document {document_id!r} not found")
        return doc

    return app


__all__ = ["create_app"]
