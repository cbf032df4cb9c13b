"""
AI-powered investment insights.

Builds a narrative prompt from already-derived ROI figures and asks Gemini
for a short business summary. The calculation never depends on the text
that comes back.
"""

import logging
from typing import Tuple

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from roi_calculator.calculations.formatting import (
    format_currency,
    format_months,
    format_percent,
)
from roi_calculator.calculations.roi import Assumptions, DerivedMetrics
from roi_calculator.config import get_settings

logger = logging.getLogger(__name__)

# ROI above which the summary ends with a call to action
CALL_TO_ACTION_ROI_PERCENT = 50

SYSTEM_INSTRUCTION = """
You are a business analyst providing a professional summary of a Return on Investment (ROI) calculation for "PowerShops".
Your response must be structured into three specific sections, using Markdown for bold headings. **Each section must be a single, concise paragraph (2-3 sentences max).**
1. **Investment Value Assessment**: State the ROI, net benefit, and payback period. Explain what these strong numbers mean for the business.
2. **Key Performance Drivers**: Identify the largest benefit contributor (e.g., Productivity Gains). Explain the operational improvements this suggests.
3. **Strategic Recommendations**: Based on the strong ROI, recommend immediate implementation and tracking success.
The tone should be authoritative and persuasive.
""".strip()

CALL_TO_ACTION = (
    "Because the ROI is high, conclude the 'Strategic Recommendations' section "
    "with a call to action: 'Schedule a demo to learn more about PowerShops.'"
)


class InsightsError(Exception):
    """Raised when insights cannot be generated."""


class InsightsConfigurationError(InsightsError):
    """Raised when the Gemini API key is missing."""


class EmptyInsightsError(InsightsError):
    """Raised when Gemini answers without any text."""


def build_user_prompt(assumptions: Assumptions, metrics: DerivedMetrics) -> str:
    """Describe the derived figures for the model."""
    lines = [
        "Generate a concise investment analysis based on this data:",
        f"- Number of Employees: {assumptions.employees}",
        f"- Subscription Term: {assumptions.term} years",
        f"- Total ROI: {format_percent(metrics.total_roi_percent)}",
        f"- Net Benefit: {format_currency(metrics.net_benefit)}",
        f"- Payback Period: {format_months(metrics.months_to_break_even)}",
        (
            f"- Benefit Breakdown: Productivity Gains are "
            f"{metrics.productivity_share_percent}% of the total benefit."
        ),
    ]
    if metrics.total_roi_percent > CALL_TO_ACTION_ROI_PERCENT:
        lines.append(CALL_TO_ACTION)
    return "\n".join(lines)


def build_prompts(
    assumptions: Assumptions, metrics: DerivedMetrics
) -> Tuple[str, str]:
    """Return the (system instruction, user prompt) pair."""
    return SYSTEM_INSTRUCTION, build_user_prompt(assumptions, metrics)


def _response_text(content) -> str:
    """Flatten a chat model response into plain text."""
    if isinstance(content, str):
        return content.strip()

    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts).strip()


async def generate_insights(
    assumptions: Assumptions, metrics: DerivedMetrics
) -> str:
    """
    Ask Gemini for a narrative summary of the ROI results.

    Args:
        assumptions: Assumptions the metrics were computed from
        metrics: Derived ROI metrics

    Returns:
        Markdown text with three bold-headed sections

    Raises:
        InsightsConfigurationError: If no API key is configured
        EmptyInsightsError: If the model returned no text
        InsightsError: For any other failure talking to the model
    """
    settings = get_settings()
    if not settings.google_api_key:
        logger.error("GOOGLE_API_KEY is not set.")
        raise InsightsConfigurationError(
            "Server configuration error: The API key is not configured."
        )

    system_instruction, user_prompt = build_prompts(assumptions, metrics)

    llm = ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.google_api_key,
    )

    try:
        response = await llm.ainvoke(
            [
                SystemMessage(content=system_instruction),
                HumanMessage(content=user_prompt),
            ]
        )
    except Exception as e:
        logger.error(f"Critical error generating insights: {str(e)}")
        raise InsightsError(
            "An internal server error occurred while generating insights. "
            f"Details: {str(e)}"
        ) from e

    insights = _response_text(response.content)
    if not insights:
        logger.error(f"Could not extract insights from Gemini response: {response}")
        raise EmptyInsightsError(
            "Received an unexpected or empty response from the AI service."
        )

    return insights
