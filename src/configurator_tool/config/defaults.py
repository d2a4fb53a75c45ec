"""
Default configurator definitions.

Used as fallback when no questions/pricing are configured for a product in
the content store. Both registries ship empty; add entries here to give a
product a price without authoring it per site.
"""
from typing import Optional

from ..engine.models import Pricing, Question


# Questions that apply to every product
DEFAULT_COMMON_QUESTIONS: list[dict] = []

# Product slug -> question definitions
DEFAULT_PRODUCT_QUESTIONS: dict[str, list[dict]] = {}

# Product slug -> pricing definition (cents)
DEFAULT_PRICING: dict[str, dict] = {}


def get_default_questions(product_slug: Optional[str]) -> list[Question]:
    """Get all default questions for a product, sorted by order_rank."""
    common = list(DEFAULT_COMMON_QUESTIONS)

    if product_slug and product_slug in DEFAULT_PRODUCT_QUESTIONS:
        raw = DEFAULT_PRODUCT_QUESTIONS[product_slug] + common
        raw = sorted(raw, key=lambda q: q.get('order_rank', 0))
    else:
        raw = common

    questions = []
    for i, data in enumerate(raw):
        question = Question.from_dict(data)
        question.id = question.id or f"default-{i}"
        questions.append(question)
    return questions


def get_default_pricing(product_slug: str) -> Optional[Pricing]:
    """Get default pricing for a product, or None."""
    data = DEFAULT_PRICING.get(product_slug)
    if not data:
        return None
    pricing = Pricing.from_dict(data)
    pricing.id = pricing.id or "default"
    pricing.product_slug = pricing.product_slug or product_slug
    return pricing
