"""Project-study cost breakdown: asks the Anthropic API for a full project budget.

The cost engine supplies the construction figures; the model distributes
the wider project budget (land, infrastructure, marketing, ...) around
them.  Data only flows from the engine to the model, never back.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import anthropic

from taqdir.config import DEFAULT_AI_TIMEOUT, DEFAULT_MODEL
from taqdir.formatting import format_per_sqm, format_sar
from taqdir.models.request import CostCalculationInput
from taqdir.services.response_parser import parse_json_response

if TYPE_CHECKING:
    from taqdir.models.estimate import CostEstimateResult
    from taqdir.models.request import ProjectStudyRequest

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Study defaults
# ---------------------------------------------------------------------------

# Share of the investment per budget line when the model is unavailable.
FALLBACK_SHARES: dict[str, float] = {
    "landCost": 0.25,
    "constructionCost": 0.50,
    "infrastructureCost": 0.12,
    "permitsAndLicenses": 0.04,
    "marketingCost": 0.06,
    "contingency": 0.03,
}

# Representative spaces used to price a study's construction cost.
STUDY_ROOM_TYPES: dict[str, tuple[str, ...]] = {
    "residential_complex": ("غرفة نوم", "صالة", "مطبخ"),
    "commercial_mall": ("محل تجاري", "مطعم"),
}
DEFAULT_STUDY_ROOM_TYPES: tuple[str, ...] = ("مكتب", "قاعة اجتماعات")

# Investment assumed when neither the caller nor the engine supplies one.
DEFAULT_INVESTMENT_AMOUNT = 5_000_000.0

DATA_SOURCE_ENGINE = "محسوب من قسم الميزانية - بيانات حقيقية"
DATA_SOURCE_ESTIMATED = "تكاليف تقديرية"

SYSTEM_PROMPT = (
    "أنت خبير في دراسات الجدوى والتطوير العقاري في المملكة العربية السعودية. "
    "أجب دائماً بكائن JSON صالح فقط، دون أي نص إضافي أو تعليقات."
)

_MAX_RETRIES = 1


@dataclass(frozen=True)
class ProjectCostBreakdown:
    """Project budget split returned to the study UI."""

    items: dict[str, Any]
    used_fallback: bool
    grounded_on_engine: bool
    warnings: list[str] = field(default_factory=list)


def build_study_cost_input(request: ProjectStudyRequest) -> CostCalculationInput:
    """Translate a project-study request into a cost engine request."""
    room_types = STUDY_ROOM_TYPES.get(request.project_type, DEFAULT_STUDY_ROOM_TYPES)
    return CostCalculationInput(
        land_area=request.total_area,
        property_type=request.project_type,
        room_types=list(room_types),
        neighborhood=request.neighborhood,
        finishing_level=request.finishing_level,
        has_basement=request.has_basement,
        parking_spaces=request.parking_spaces,
    )


def fallback_breakdown(investment_amount: float, *, grounded: bool) -> dict[str, Any]:
    """Deterministic budget split used when the AI answer is unusable."""
    items: dict[str, Any] = {
        key: f"{format_sar(investment_amount * share)} ({share:.0%})"
        for key, share in FALLBACK_SHARES.items()
    }
    items["totalProjectCost"] = format_sar(investment_amount)
    items["dataSource"] = DATA_SOURCE_ENGINE if grounded else DATA_SOURCE_ESTIMATED
    return items


class ProjectCostBreakdownService:
    """Generates project-study cost breakdowns with the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = DEFAULT_AI_TIMEOUT,
        client: anthropic.Anthropic | None = None,
    ) -> None:
        self._client = client or anthropic.Anthropic(api_key=api_key, timeout=timeout)
        self._model = model

    def generate(
        self,
        project_type: str,
        total_area: float,
        investment_amount: float | None = None,
        cost_result: CostEstimateResult | None = None,
    ) -> ProjectCostBreakdown:
        """Produce a project budget split.

        Parameters
        ----------
        project_type
            Study project type label (e.g. ``residential_complex``).
        total_area
            Land area in square meters.
        investment_amount
            Total investment in SAR. Defaults to the engine total when a
            cost result is given.
        cost_result
            Engine estimate whose figures the model must use for the
            construction line.

        Never raises for API or parse failures; the deterministic split is
        returned instead, with ``used_fallback`` set.
        """
        if investment_amount is None:
            investment_amount = (
                cost_result.total_cost if cost_result is not None else DEFAULT_INVESTMENT_AMOUNT
            )
        grounded = cost_result is not None
        fallback = fallback_breakdown(investment_amount, grounded=grounded)
        prompt = self.build_prompt(project_type, investment_amount, total_area, cost_result)

        warnings: list[str] = []
        for attempt in range(_MAX_RETRIES + 1):
            try:
                text = self._call_api(prompt)
            except anthropic.APIError as exc:
                logger.warning("AI cost breakdown request failed: %s", exc)
                warnings.append(f"AI service error: {exc}")
                break

            parsed = parse_json_response(text, fallback)
            if not parsed.used_fallback:
                return ProjectCostBreakdown(
                    items=parsed.data,
                    used_fallback=False,
                    grounded_on_engine=grounded,
                    warnings=warnings,
                )
            warnings.append(f"Unparseable AI response: {parsed.error}")
            if attempt < _MAX_RETRIES:
                logger.warning(
                    "Malformed cost breakdown response, retrying (attempt %d/%d)",
                    attempt + 2,
                    _MAX_RETRIES + 1,
                )

        return ProjectCostBreakdown(
            items=fallback,
            used_fallback=True,
            grounded_on_engine=grounded,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Prompt
    # ------------------------------------------------------------------

    @staticmethod
    def build_prompt(
        project_type: str,
        investment_amount: float,
        total_area: float,
        cost_result: CostEstimateResult | None = None,
    ) -> str:
        """Build the Arabic prompt, embedding engine figures when available."""
        lines = [
            f"تفصيل دقيق للتكاليف لمشروع {project_type} "
            f"بقيمة {format_sar(investment_amount)} ومساحة {total_area:,.0f} متر مربع.",
        ]

        if cost_result is not None:
            lines += [
                "",
                "التكاليف الحقيقية المحسوبة من قسم الميزانية:",
                f"- إجمالي تكلفة البناء: {format_sar(cost_result.total_cost)}",
                f"- تكلفة المتر المربع: {format_per_sqm(cost_result.cost_per_square_meter)}",
                "- تفصيل التكاليف:",
                f"  * الهيكل الإنشائي: {format_sar(cost_result.structural_cost)}",
                f"  * التشطيبات: {format_sar(cost_result.finishing_cost)}",
                f"  * الكهرباء: {format_sar(cost_result.electrical_cost)}",
                f"  * السباكة: {format_sar(cost_result.plumbing_cost)}",
                f"  * التكييف: {format_sar(cost_result.hvac_cost)}",
                f"  * التراخيص: {format_sar(cost_result.permits_cost)}",
                "",
                "استخدم هذه التكاليف الحقيقية المحسوبة من قسم الميزانية.",
            ]

        lines += [
            "",
            "قدم JSON مفصل للتكاليف بنسب واقعية للسوق السعودي:",
            "- landCost: تكلفة الأرض (25% من إجمالي المشروع)",
            "- constructionCost: تكلفة البناء والإنشاء (50% - استخدم التكلفة الحقيقية المحسوبة)",
            "- infrastructureCost: البنية التحتية والمرافق (12%)",
            "- permitsAndLicenses: التراخيص والرسوم الحكومية (4%)",
            "- marketingCost: التسويق والمبيعات (6%)",
            "- contingency: احتياطي للطوارئ (3%)",
            "- totalProjectCost: إجمالي تكلفة المشروع",
            f'- dataSource: "{DATA_SOURCE_ENGINE if cost_result is not None else DATA_SOURCE_ESTIMATED}"',
            "",
            "مهم: أرجع JSON صالح فقط.",
        ]
        return "\n".join(lines)

    def _call_api(self, prompt: str) -> str:
        """Call the Anthropic Messages API and join the text blocks."""
        response = self._client.messages.create(
            model=self._model,
            max_tokens=1200,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        text_blocks = [block.text for block in response.content if block.type == "text"]
        return "\n".join(text_blocks)
