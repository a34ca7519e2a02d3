"""API version 1 routes."""

from fastapi import APIRouter

from credit_reports.api.v1 import reports

router = APIRouter(prefix="/api/v1")

router.include_router(reports.router)
