# src/ai_todos/api/app.py

"""
HTTP API.

Routes:
- POST   /ai-todos         text -> todos via the decomposition pipeline
- GET    /todos            caller's todos, newest first
- POST   /todos            add one todo
- PATCH  /todos/{id}       set is_done
- DELETE /todos/{id}
- POST   /delete-account   privileged, irreversible
- GET    /health

Errors are JSON {"error", "kind", ...diagnostics} with a status chosen by http_status_for(kind).
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..accounts.service import bearer_token, delete_account
from ..core.state import AppState
from ..errors import AiTodosError, EmptyInput, Unauthenticated, http_status_for

logger = logging.getLogger(__name__)

_CORS_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


class TodoIn(BaseModel):
    title: str


class TodoPatch(BaseModel):
    is_done: bool


def create_app(state: AppState) -> FastAPI:
    app = FastAPI(title=str(getattr(state.settings, "app_name", "ai-todos")))
    app.state.app_state = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(state.settings, "cors_origins", None) or ["*"]),
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=_CORS_HEADERS,
    )

    @app.exception_handler(AiTodosError)
    async def _handle_app_error(request: Request, exc: AiTodosError) -> JSONResponse:
        status = http_status_for(exc.kind)
        if status >= 500:
            logger.error("%s %s -> %s (%s)", request.method, request.url.path, status, exc.kind)
        else:
            logger.info("%s %s -> %s (%s)", request.method, request.url.path, status, exc.kind)
        return JSONResponse(exc.to_payload(), status_code=status)

    def current_user(authorization: Optional[str] = Header(default=None)) -> str:
        token = bearer_token(authorization)
        if not token:
            raise Unauthenticated()
        user_id = state.accounts.resolve_token(token)
        if not user_id:
            raise Unauthenticated("Invalid session / user not found")
        return user_id

    @app.get("/health")
    async def health() -> dict[str, Any]:
        return {"ok": True, "offline": state.offline}

    @app.post("/ai-todos")
    async def ai_todos(request: Request, user_id: str = Depends(current_user)) -> dict[str, Any]:
        # Unparseable bodies count as empty text, like a missing "text" field.
        try:
            body = await request.json()
        except ValueError:
            body = {}
        text = body.get("text") if isinstance(body, dict) else None
        result = await state.pipeline.run(text, user_id)
        return result.to_payload()

    # Store-backed routes are plain def: FastAPI runs them in its threadpool.
    @app.get("/todos")
    def list_todos(user_id: str = Depends(current_user)) -> list[dict[str, Any]]:
        return [t.to_dict() for t in state.task_store.list_for_owner(user_id)]

    @app.post("/todos", status_code=201)
    def add_todo(todo: TodoIn, user_id: str = Depends(current_user)) -> dict[str, Any]:
        title = todo.title.strip()
        if not title:
            raise EmptyInput("Empty title")
        return state.task_store.add_task(user_id, title).to_dict()

    @app.patch("/todos/{task_id}")
    def patch_todo(
        task_id: int, patch: TodoPatch, user_id: str = Depends(current_user)
    ) -> dict[str, Any]:
        return state.task_store.set_done(user_id, task_id, patch.is_done).to_dict()

    @app.delete("/todos/{task_id}")
    def remove_todo(task_id: int, user_id: str = Depends(current_user)) -> dict[str, Any]:
        state.task_store.delete(user_id, task_id)
        return {"ok": True, "deleted_id": task_id}

    @app.post("/delete-account")
    def delete_account_route(
        authorization: Optional[str] = Header(default=None),
    ) -> dict[str, Any]:
        return delete_account(
            state.accounts,
            state.task_store,
            token=bearer_token(authorization),
            admin_token=getattr(state.settings, "admin_token", None),
        )

    return app
