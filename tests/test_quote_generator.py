"""Tests for quote option generation."""

from app.language.caller_hi import get_caller_text
from app.models import QuoteTier
from app.quote_generator import format_quote_options, generate_quote_options


def test_defaults_give_three_tiers():
    result = generate_quote_options({"lead_id": "lead_1"})

    assert result.success is True
    assert [o.tier for o in result.options] == [QuoteTier.BASIC, QuoteTier.STANDARD, QuoteTier.PREMIUM]
    assert all(o.timeline == "5 days" for o in result.options)
    assert all(o.advance_percentage == 30 for o in result.options)


def test_requirements_shape_options():
    result = generate_quote_options({
        "lead_id": "lead_1",
        "requirements": {"options": 2, "timeline": "2 weeks", "advance": 50, "labour_and_material": True},
    })

    assert len(result.options) == 2
    assert result.options[0].timeline == "2 weeks"
    assert result.options[1].advance_percentage == 50


def test_invalid_requirements():
    result = generate_quote_options({"lead_id": "lead_1", "requirements": {"options": "many"}})

    assert result.success is False
    assert result.options == []
    assert result.error


def test_format_quote_options():
    options = generate_quote_options({"requirements": {"options": 1}}).options
    text = format_quote_options(options)

    assert text.startswith(get_caller_text("quote_options_header"))
    assert "1. Basic Option" in text
    assert "₹50,000" in text
    assert text.endswith(get_caller_text("quote_options_footer"))


def test_format_empty_options():
    assert format_quote_options([]) == get_caller_text("quote_options_empty")
