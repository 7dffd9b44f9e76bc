"""Formatting helpers for cost estimate output.

Provides human-readable SAR amounts the way the Arabic UI shows them
(e.g. '1,234,567 ريال', '12.4M SAR').
"""

from __future__ import annotations

CURRENCY_AR = "ريال"


def format_sar(amount: float) -> str:
    """Format a SAR amount with thousands separators.

    - Amounts >= 10,000: no decimals (e.g., '1,234,567 ريال')
    - Amounts < 10,000: two decimals (e.g., '9,876.54 ريال')
    """
    if amount >= 10_000:
        return f"{amount:,.0f} {CURRENCY_AR}"
    return f"{amount:,.2f} {CURRENCY_AR}"


def format_sar_compact(amount: float) -> str:
    """Format a SAR amount compactly: '12.4M SAR', '850K SAR', '9,500 SAR'."""
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M SAR"
    if amount >= 10_000:
        return f"{amount / 1_000:,.0f}K SAR"
    return f"{amount:,.0f} SAR"


def format_per_sqm(amount: float) -> str:
    """Format a per-square-meter rate as 'X,XXX ريال/م²'."""
    return f"{amount:,.0f} {CURRENCY_AR}/م²"
