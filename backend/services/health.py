"""
Health service layer containing all health check business logic.
Separated from the web layer for better testability and maintainability.
"""

from typing import Optional

from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine

from config import LLM_API_KEY, LLM_GATEWAY_URL
from database_models import get_engine
from schemas import HealthResponse, HealthStatusDetail


class HealthService:
    """Service class handling all health check business logic."""

    def __init__(self, engine: Optional[Engine] = None):
        self._engine = engine
        self.llm_gateway_url = LLM_GATEWAY_URL
        self.llm_api_key = LLM_API_KEY

    async def perform_health_check(self) -> HealthResponse | JSONResponse:
        database_status = self._check_database_status()
        llm_status = self._check_llm_gateway_config()

        overall_status = (
            "ok"
            if database_status.status == "connected"
            and llm_status.status == "configured"
            else "error"
        )

        response_payload = HealthResponse(
            status=overall_status, database=database_status, llm_gateway=llm_status
        )

        if overall_status == "error":
            return JSONResponse(status_code=503, content=response_payload.model_dump())

        return response_payload

    def _check_database_status(self) -> HealthStatusDetail:
        """Check that the database answers a trivial query."""
        try:
            engine = self._engine or get_engine()
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return HealthStatusDetail(
                status="connected", details="Database is responsive."
            )
        except Exception as e:
            return HealthStatusDetail(
                status="disconnected", details=f"Database connection error: {str(e)}"
            )

    def _check_llm_gateway_config(self) -> HealthStatusDetail:
        """The gateway is only called per chat request; report its configuration."""
        if not self.llm_api_key or not self.llm_gateway_url:
            return HealthStatusDetail(
                status="not_configured",
                details="LLM_API_KEY or LLM_GATEWAY_URL is not set.",
            )
        return HealthStatusDetail(
            status="configured", details=f"Gateway at {self.llm_gateway_url}"
        )
