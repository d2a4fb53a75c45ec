"""
Pricing Engine - Resolves definitions for a product and prices the answers.

Resolution order for both pricing and questions:
1. Category with the given slug
2. Legacy product_slug link
3. Built-in defaults (config/defaults.py)
4. No pricing at all -> zero result
"""
import logging
from typing import Optional

from ..config.defaults import get_default_pricing, get_default_questions
from ..data.content_store import ContentStore
from .models import Answers, PriceCalculationResult, Pricing, Question
from .pricing import calculate_price_from_config
from .visibility import filter_visible_answers

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Prices configurator answers against the definitions in a content store.

    Holds no state of its own beyond the store; every call re-reads the
    (store-cached) definitions and computes a fresh result.
    """

    def __init__(self, store: ContentStore):
        self.store = store

    def resolve_pricing(self, product_slug: str, site: str) -> Optional[Pricing]:
        """Resolve the pricing definition for a product, or None."""
        pricing = self.store.get_pricing_for_category(product_slug, site)
        if pricing is None:
            pricing = self.store.get_pricing_for_product(product_slug, site)
        if pricing is None:
            pricing = get_default_pricing(product_slug)
        return pricing

    def resolve_questions(self, product_slug: str, site: str) -> list[Question]:
        """Resolve the question definitions for a product."""
        questions = self.store.get_questions_for_category(product_slug, site)
        if not questions:
            questions = self.store.get_questions_for_product(product_slug, site)
        if not questions:
            questions = get_default_questions(product_slug)
        return questions

    def calculate(self, product_slug: str, answers: Answers, site: str) -> PriceCalculationResult:
        """
        Calculate a price estimate for the given answers.

        Args:
            product_slug: Category (or legacy product) slug
            answers: Question key -> answer
            site: Site slug the definitions belong to

        Returns:
            PriceCalculationResult; the zero result when no pricing is configured
        """
        pricing = self.resolve_pricing(product_slug, site)
        if pricing is None:
            logger.info("No pricing configured for %s on site %s", product_slug, site)
            return PriceCalculationResult.zero()

        questions = self.resolve_questions(product_slug, site)
        catalogue_items = self.store.get_catalogue_items(site)

        return calculate_price_from_config(pricing, questions, answers, catalogue_items)

    def calculate_guarded(self, product_slug: str, answers: Answers, site: str) -> PriceCalculationResult:
        """Calculate after dropping answers for hidden questions and options."""
        questions = self.resolve_questions(product_slug, site)
        visible_answers = filter_visible_answers(questions, answers)
        return self.calculate(product_slug, visible_answers, site)
