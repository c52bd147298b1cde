"""Quote option generation (the generate_quote_options tool)."""

from typing import Any

from pydantic import ValidationError

from app.language.caller_hi import get_caller_text
from app.logging_config import get_logger
from app.models import QuoteOption, QuoteRequirements, QuoteResponse, QuoteTier

logger = get_logger(__name__)

DEFAULT_TIMELINE = "5 days"
DEFAULT_ADVANCE_PERCENTAGE = 30

# Sample price book: tier, price (INR), description, includes.
# In production, this would come from the contractor's rate card.
TIER_TEMPLATES = [
    (
        QuoteTier.BASIC,
        50000,
        "Basic painting with standard quality paint, single coat",
        ["Labour", "Material (standard paint)", "Basic preparation"],
    ),
    (
        QuoteTier.STANDARD,
        75000,
        "Standard painting with premium quality paint, double coat",
        ["Labour", "Material (premium paint)", "Full preparation", "Primer"],
    ),
    (
        QuoteTier.PREMIUM,
        100000,
        "Premium painting with luxury paint, double coat, putty work",
        ["Labour", "Material (luxury paint)", "Full preparation", "Putty work", "Primer", "Damp proofing"],
    ),
]


def generate_quote_options(arguments: dict[str, Any]) -> QuoteResponse:
    """
    Generate quote options for a lead from generate_quote_options tool arguments.

    Returns at most one option per tier, up to the requested options count.
    """
    try:
        requirements = QuoteRequirements.model_validate(arguments.get("requirements") or {})
    except ValidationError as e:
        logger.warning("quote_requirements_invalid", lead_id=arguments.get("lead_id"), error=str(e))
        return QuoteResponse(success=False, error="Invalid quote requirements")

    timeline = requirements.timeline or DEFAULT_TIMELINE
    advance = requirements.advance or DEFAULT_ADVANCE_PERCENTAGE

    options = [
        QuoteOption(
            tier=tier,
            price=price,
            description=description,
            timeline=timeline,
            advance_percentage=advance,
            includes=list(includes),
        )
        for tier, price, description, includes in TIER_TEMPLATES[:max(requirements.options, 0)]
    ]

    logger.info(
        "quote_options_generated",
        lead_id=arguments.get("lead_id"),
        count=len(options),
        timeline=timeline,
        advance=advance,
    )
    return QuoteResponse(success=True, options=options)


def format_quote_options(options: list[QuoteOption]) -> str:
    """Format quote options into a user-friendly Hinglish message."""
    if not options:
        return get_caller_text("quote_options_empty")

    parts = [get_caller_text("quote_options_header")]

    for index, option in enumerate(options, 1):
        parts.append(f"{index}. {option.tier.value.capitalize()} Option")
        parts.append(f"   Price: ₹{option.price:,}")
        parts.append(f"   Description: {option.description}")
        parts.append(f"   Timeline: {option.timeline}")
        parts.append(f"   Advance: {option.advance_percentage}%")
        if option.includes:
            parts.append(f"   Includes: {', '.join(option.includes)}")
        parts.append("")

    parts.append(get_caller_text("quote_options_footer"))
    return "\n".join(parts)
