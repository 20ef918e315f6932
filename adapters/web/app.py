"""
FastAPI application: calculator evaluation, catalog search and the contact relay.

Every JSON response uses the `{success, data | error}` envelope.
"""

from typing import Any

import structlog
import uvicorn
from fastapi import Body, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.email import TransactionalEmailClient
from healthcalc.catalog import (
    CALCULATORS,
    get_all_categories,
    get_calculator_info,
    search_calculators,
)
from healthcalc.config import AppConfig, get_config
from healthcalc.domain.errors import UnknownCalculatorError
from healthcalc.logging_config import configure_logging
from healthcalc.services.contact import ContactService, ContactSubmission
from healthcalc.services.evaluation import CalculatorEvaluator, default_evaluator

logger = structlog.get_logger(__name__)


def _ok(data: Any) -> dict[str, Any]:
    return {"success": True, "data": data}


def _fail(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error, **extra}
    )


def create_app(
    config: AppConfig | None = None,
    evaluator: CalculatorEvaluator | None = None,
    contact_service: ContactService | None = None,
) -> FastAPI:
    """Build the API. Collaborators default to the production wiring from config."""
    config = config or get_config()
    app = FastAPI(title="Health Calculators API", debug=config.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allowed_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.state.evaluator = evaluator or default_evaluator()
    app.state.contact_service = contact_service or ContactService(
        TransactionalEmailClient(config.email), config.email
    )

    @app.get("/api/calculators")
    async def list_calculators() -> dict[str, Any]:
        return _ok([info.model_dump() for info in CALCULATORS])

    @app.get("/api/search")
    async def search(q: str = Query(default="")) -> dict[str, Any]:
        return _ok([info.model_dump() for info in search_calculators(q)])

    @app.get("/api/categories")
    async def categories() -> dict[str, Any]:
        return _ok(get_all_categories())

    @app.post("/api/calculators/{calculator_id}", response_model=None)
    async def evaluate(
        calculator_id: str,
        request: Request,
        payload: dict[str, Any] = Body(default_factory=dict),
    ) -> dict[str, Any] | JSONResponse:
        evaluator: CalculatorEvaluator = request.app.state.evaluator
        try:
            outcome = evaluator.evaluate(calculator_id, payload)
        except UnknownCalculatorError as exc:
            return _fail(404, str(exc))
        if outcome.is_err():
            error = outcome.unwrap_err()
            return _fail(
                422,
                error.message,
                errors=[field_error.model_dump() for field_error in error.errors],
            )
        data = outcome.unwrap().model_dump()
        info = get_calculator_info(calculator_id)
        if info is not None:
            data["title"] = info.title
        return _ok(data)

    @app.post("/api/contact", response_model=None)
    async def contact(
        submission: ContactSubmission, request: Request
    ) -> dict[str, Any] | JSONResponse:
        service: ContactService = request.app.state.contact_service
        outcome = await service.submit(submission)
        if outcome.is_err():
            return _fail(500, "Failed to send message. Please try again later.")
        return _ok({"id": outcome.unwrap()})

    logger.info("api_created", environment=config.environment, routes=len(app.routes))
    return app


def run() -> None:
    """Serve the API with uvicorn using APIConfig settings."""
    config = get_config()
    configure_logging(config.logging)
    uvicorn.run(
        "adapters.web.app:create_app",
        factory=True,
        host=config.api.host,
        port=config.api.port,
        reload=config.api.reload,
        workers=None if config.api.reload else config.api.worker_count,
    )
