"""Render module for compensation output display."""

from render.renderers import (
    BaseRenderer,
    SummaryRenderer,
    BenefitsRenderer,
    MarketComparisonRenderer,
    CompositionRenderer,
    FieldsRenderer,
    CatalogRenderer,
    format_currency,
    format_percent,
    format_field,
    limit_warnings,
    RENDERER_REGISTRY,
)

__all__ = [
    'BaseRenderer',
    'SummaryRenderer',
    'BenefitsRenderer',
    'MarketComparisonRenderer',
    'CompositionRenderer',
    'FieldsRenderer',
    'CatalogRenderer',
    'format_currency',
    'format_percent',
    'format_field',
    'limit_warnings',
    'RENDERER_REGISTRY',
]
