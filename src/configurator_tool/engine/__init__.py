"""Engine subpackage - visibility rules and price calculation."""
from .models import (
    Operator,
    VisibilityRule,
    VisibilityConfig,
    QuestionOption,
    Question,
    PriceCatalogueItem,
    PriceModifier,
    Pricing,
    PriceCalculationResult,
)
from .visibility import is_visible, filter_visible_answers
from .pricing import calculate_price_from_config
from .formatting import format_price, format_price_range

__all__ = [
    'Operator', 'VisibilityRule', 'VisibilityConfig', 'QuestionOption', 'Question',
    'PriceCatalogueItem', 'PriceModifier', 'Pricing', 'PriceCalculationResult',
    'is_visible', 'filter_visible_answers', 'calculate_price_from_config',
    'format_price', 'format_price_range',
]
