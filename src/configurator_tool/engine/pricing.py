"""
Price Engine - Computes a price range from a pricing definition and answers.

Resolution order for a selected option:
1. Catalogue item referenced by the option (scaled per m² / per m when the
   dimensions are known)
2. Manual priceModifierMin/Max on the option
3. Deprecated flat priceModifier
4. No contribution

The deprecated pricing.price_modifiers list is applied afterwards as a
separate pass. Both passes add to the same running total, so an option
priced both ways is counted twice.
"""
from dataclasses import dataclass, field
from typing import Optional

from .dimensions import Dimensions, infer_dimensions, is_dimension_key
from .formatting import format_decimal, number_to_text
from .models import (
    Answers,
    BreakdownLine,
    PriceBreakdown,
    PriceCalculationResult,
    PriceCatalogueItem,
    Pricing,
    Question,
    QuestionOption,
    UNIT_PER_METER,
    UNIT_PER_SQUARE_METER,
)


@dataclass
class PriceRange:
    min: float
    max: float


@dataclass
class _RunningTotal:
    """Modifier totals and breakdown lines, in processing order."""
    min: float = 0
    max: float = 0
    lines: list[BreakdownLine] = field(default_factory=list)

    def add(self, label: str, price: PriceRange):
        self.min += price.min
        self.max += price.max
        self.lines.append(BreakdownLine(label=label, amount=price.min))


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_option_flat_price(
    option: QuestionOption,
    catalogue: dict[str, PriceCatalogueItem]
) -> Optional[PriceRange]:
    """Get option price from the catalogue or the manual price fields, unscaled."""
    if option.catalogue_item_id:
        item = catalogue.get(option.catalogue_item_id)
        if item:
            return PriceRange(min=item.price_min, max=item.price_max)
        # Catalogue item was deleted
        return None

    if option.price_modifier_min is not None or option.price_modifier_max is not None:
        return PriceRange(
            min=option.price_modifier_min or 0,
            max=option.price_modifier_max or option.price_modifier_min or 0,
        )

    if option.price_modifier is not None:
        return PriceRange(min=option.price_modifier, max=option.price_modifier)

    return None


def resolve_option_price(
    option: QuestionOption,
    catalogue: dict[str, PriceCatalogueItem],
    dimensions: Dimensions
) -> Optional[PriceRange]:
    """Get option price, applying the catalogue item's unit multiplier."""
    item = catalogue.get(option.catalogue_item_id) if option.catalogue_item_id else None

    if item:
        area = dimensions.area
        if item.unit == UNIT_PER_SQUARE_METER and area > 0:
            return PriceRange(min=item.price_min * area, max=item.price_max * area)
        if item.unit == UNIT_PER_METER and dimensions.length > 0:
            return PriceRange(min=item.price_min * dimensions.length, max=item.price_max * dimensions.length)
        # "per stuk" or no unit = flat price
        return PriceRange(min=item.price_min, max=item.price_max)

    return get_option_flat_price(option, catalogue)


def option_breakdown_label(
    option: QuestionOption,
    catalogue: dict[str, PriceCatalogueItem],
    dimensions: Dimensions
) -> str:
    """Option label, annotated with the area or length it was scaled by."""
    item = catalogue.get(option.catalogue_item_id) if option.catalogue_item_id else None
    unit = item.unit if item else None
    area = dimensions.area

    if unit == UNIT_PER_SQUARE_METER and area > 0:
        return f"{option.label} ({format_decimal(area)} m²)"
    if unit == UNIT_PER_METER and dimensions.length > 0:
        return f"{option.label} ({number_to_text(dimensions.length)} m)"
    return option.label


def _add_option(
    totals: _RunningTotal,
    option: QuestionOption,
    catalogue: dict[str, PriceCatalogueItem],
    dimensions: Dimensions
):
    price = resolve_option_price(option, catalogue, dimensions)
    if price:
        totals.add(option_breakdown_label(option, catalogue, dimensions), price)


def apply_option_pricing(
    totals: _RunningTotal,
    questions: dict[str, Question],
    answers: Answers,
    catalogue: dict[str, PriceCatalogueItem],
    dimensions: Dimensions
):
    """Native pass: price every answered question from its own definition."""
    for question_key, answer in answers.items():
        if answer is None:
            continue

        question = questions.get(question_key)
        if not question:
            # Stale answer for a question that no longer exists
            continue

        if question.type == "single-select" and isinstance(answer, str):
            option = question.find_option(answer)
            if option:
                _add_option(totals, option, catalogue, dimensions)

        elif question.type == "multi-select" and isinstance(answer, list):
            for value in answer:
                option = question.find_option(value)
                if option:
                    _add_option(totals, option, catalogue, dimensions)

        elif question.type == "number" and _is_number(answer):
            # Dimensions only feed area/length, they are never priced directly
            if is_dimension_key(question_key):
                continue

            if question.price_per_unit_min or question.price_per_unit_max:
                per_unit_min = question.price_per_unit_min or 0
                per_unit_max = question.price_per_unit_max or per_unit_min
                totals.add(
                    f"{question.label}: {number_to_text(answer)}",
                    PriceRange(min=per_unit_min * answer, max=per_unit_max * answer),
                )


def apply_legacy_modifiers(
    totals: _RunningTotal,
    pricing: Pricing,
    questions: dict[str, Question],
    answers: Answers
):
    """Legacy pass: flat modifiers from pricing.price_modifiers."""
    for modifier in pricing.price_modifiers or []:
        answer = answers.get(modifier.question_key)
        if answer is None:
            continue

        if isinstance(answer, str):
            selected = answer == modifier.option_value
        elif isinstance(answer, list):
            selected = modifier.option_value in answer
        else:
            selected = False

        if not selected:
            continue

        question = questions.get(modifier.question_key)
        option = question.find_option(modifier.option_value) if question else None
        totals.add(
            option.label if option and option.label else modifier.option_value,
            PriceRange(min=modifier.modifier, max=modifier.modifier),
        )


def calculate_price_from_config(
    pricing: Pricing,
    questions: list[Question],
    answers: Answers,
    catalogue_items: Optional[list[PriceCatalogueItem]] = None
) -> PriceCalculationResult:
    """
    Calculate price from a pricing definition and answers.

    Pure function: inputs are not modified and nothing is cached.

    Args:
        pricing: Base price range and legacy modifiers
        questions: Question definitions for the product
        answers: Question key -> answer, in the order the user gave them
        catalogue_items: Priced catalogue items options may reference

    Returns:
        PriceCalculationResult with min/max in cents and a breakdown whose
        lines follow the answer order, then the legacy modifiers
    """
    catalogue = {item.id: item for item in catalogue_items or []}
    question_map = {q.question_key: q for q in questions}
    dimensions = infer_dimensions(answers)

    totals = _RunningTotal()
    apply_option_pricing(totals, question_map, answers, catalogue, dimensions)
    apply_legacy_modifiers(totals, pricing, question_map, answers)

    return PriceCalculationResult(
        min=pricing.base_price_min + totals.min,
        max=pricing.base_price_max + totals.max,
        breakdown=PriceBreakdown(
            base_min=pricing.base_price_min,
            base_max=pricing.base_price_max,
            modifiers=totals.lines,
        ),
    )
