"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taqdir import __version__
from taqdir.config import Settings, load_settings
from taqdir.exceptions import AIServiceUnavailableError, InvalidInputError, TaqdirError
from taqdir.models.request import (  # noqa: TCH001 (FastAPI resolves at runtime)
    CostEstimateRequest,
    ProjectStudyRequest,
)

if TYPE_CHECKING:
    from taqdir.engine import CostEngine
    from taqdir.models.estimate import CostEstimateResult
    from taqdir.services.cost_breakdown import ProjectCostBreakdownService
    from taqdir.storage import EstimateStore

logger = logging.getLogger(__name__)

MSG_MISSING_DATA = "جميع البيانات مطلوبة لاحتساب التكلفة"
MSG_INVALID_INPUT = "البيانات المدخلة غير صالحة لاحتساب التكلفة"
MSG_ESTIMATION_FAILED = "حدث خطأ في احتساب التكلفة"
MSG_NOT_FOUND = "تقدير التكلفة غير موجود"
MSG_AI_DISABLED = "خدمة الذكاء الاصطناعي غير مفعلة. يرجى ضبط ANTHROPIC_API_KEY."

ACCURACY_ENGINE = "عالية - تكاليف مبنية على أسعار السوق"
ACCURACY_ESTIMATED = "متوسطة - تكاليف تقديرية"


def create_app(
    *,
    cost_engine: CostEngine | None = None,
    store: EstimateStore | None = None,
    study_service: ProjectCostBreakdownService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    cost_engine
        Optional pre-built cost engine. If not provided, one is created via
        create_default_engine on first request, using the configured rates.
    store
        Optional estimate store. Defaults to a fresh in-memory store.
    study_service
        Optional pre-built AI cost breakdown service for dependency
        injection (e.g. tests). If not provided, one is created from the
        settings on first request to the project-study endpoint.
    settings
        Optional settings. Loaded from the environment when omitted.
    """
    if settings is None:
        settings = load_settings()
    app = FastAPI(title="Taqdir", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if store is None:
        from taqdir.storage import InMemoryEstimateStore

        store = InMemoryEstimateStore()

    # Store on app state so tests can inject mocks
    app.state.settings = settings
    app.state.cost_engine = cost_engine
    app.state.store = store
    app.state.study_service = study_service

    def _get_cost_engine() -> CostEngine:
        eng: CostEngine | None = app.state.cost_engine
        if eng is not None:
            return eng
        from taqdir.factory import create_default_engine

        eng = create_default_engine(settings.rates())
        app.state.cost_engine = eng
        return eng

    def _get_study_service() -> ProjectCostBreakdownService:
        svc: ProjectCostBreakdownService | None = app.state.study_service
        if svc is not None:
            return svc
        if not settings.ai_enabled:
            msg = "ANTHROPIC_API_KEY is not set"
            raise AIServiceUnavailableError(msg)
        from taqdir.services.cost_breakdown import ProjectCostBreakdownService

        svc = ProjectCostBreakdownService(
            api_key=settings.anthropic_api_key,
            model=settings.model,
            timeout=settings.ai_timeout,
        )
        app.state.study_service = svc
        return svc

    # ------------------------------------------------------------------
    # Error handlers
    # ------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def _validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = [".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()]
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": MSG_MISSING_DATA, "fields": fields},
        )

    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": MSG_INVALID_INPUT, "detail": str(exc)},
        )

    @app.exception_handler(AIServiceUnavailableError)
    async def _ai_unavailable(
        request: Request, exc: AIServiceUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": MSG_AI_DISABLED},
        )

    @app.exception_handler(TaqdirError)
    async def _taqdir_error(request: Request, exc: TaqdirError) -> JSONResponse:
        logger.error("Unhandled service error: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": MSG_ESTIMATION_FAILED},
        )

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    # ------------------------------------------------------------------
    # POST /api/cost-estimate
    # ------------------------------------------------------------------

    @app.post("/api/cost-estimate")
    def cost_estimate(body: CostEstimateRequest) -> dict[str, Any]:
        engine = _get_cost_engine()
        result = engine.estimate(body)
        record = app.state.store.save(body, result)
        logger.info(
            "Cost estimate %s: %s in %s, total %.2f SAR",
            record.id,
            body.property_type,
            body.neighborhood,
            result.total_cost,
        )
        return {
            "success": True,
            "costEstimate": record.to_record_dict(),
            "costResult": result.to_json_dict(),
        }

    # ------------------------------------------------------------------
    # GET /api/cost-estimate/{estimate_id}
    # ------------------------------------------------------------------

    @app.get("/api/cost-estimate/{estimate_id}", response_model=None)
    def get_cost_estimate(estimate_id: str) -> dict[str, Any] | JSONResponse:
        record = app.state.store.get(estimate_id)
        if record is None:
            return JSONResponse(
                status_code=404,
                content={"success": False, "error": MSG_NOT_FOUND},
            )
        return {
            "success": True,
            "costEstimate": record.to_record_dict(),
            "costResult": record.result.to_json_dict(),
        }

    # ------------------------------------------------------------------
    # GET /api/reference/neighborhoods
    # ------------------------------------------------------------------

    @app.get("/api/reference/neighborhoods")
    def neighborhoods() -> dict[str, Any]:
        from taqdir.data.neighborhoods import DEFAULT_NEIGHBORHOOD_MULTIPLIER
        from taqdir.data.repository import ReferenceDataRepository

        table = ReferenceDataRepository().neighborhood_multipliers()
        return {
            "neighborhoods": [
                {"name": name, "multiplier": multiplier}
                for name, multiplier in sorted(
                    table.items(), key=lambda kv: kv[1], reverse=True
                )
            ],
            "defaultMultiplier": DEFAULT_NEIGHBORHOOD_MULTIPLIER,
        }

    # ------------------------------------------------------------------
    # POST /api/project-study/cost-breakdown
    # ------------------------------------------------------------------

    @app.post("/api/project-study/cost-breakdown")
    def project_cost_breakdown(body: ProjectStudyRequest) -> dict[str, Any]:
        from taqdir.services.cost_breakdown import build_study_cost_input

        service = _get_study_service()
        engine = _get_cost_engine()

        cost_result: CostEstimateResult | None
        try:
            cost_result = engine.estimate(build_study_cost_input(body))
        except InvalidInputError as exc:
            logger.warning("Study cost calculation failed, using estimates: %s", exc)
            cost_result = None

        breakdown = service.generate(
            project_type=body.project_type,
            total_area=body.total_area,
            investment_amount=body.investment_amount,
            cost_result=cost_result,
        )
        return {
            "success": True,
            "costResult": cost_result.to_json_dict() if cost_result is not None else None,
            "costBreakdown": breakdown.items,
            "usedFallback": breakdown.used_fallback,
            "groundedOnEngine": breakdown.grounded_on_engine,
            "warnings": breakdown.warnings,
            "dataAccuracy": ACCURACY_ENGINE if cost_result is not None else ACCURACY_ESTIMATED,
        }

    return app
