"""FastAPI dependency-injection helpers."""

from __future__ import annotations

from fastapi import Request

from design_request.service import SubmissionHandler


def get_handler(request: Request) -> SubmissionHandler:
    return request.app.state.handler
