"""
Definitions Lint - Checks authored questions, pricing and catalogue for mistakes.

Errors are definitions the engine cannot interpret sensibly (duplicate keys,
unknown question types, ambiguous option values). Warnings are definitions
the engine tolerates but that are probably not what the author meant: a rule
on a question that does not exist is simply never true, a dangling catalogue
reference simply prices at nothing.
"""
from typing import Optional

from ..data.content_store import ContentStore
from ..engine.models import (
    CATALOGUE_UNITS,
    Operator,
    PriceCatalogueItem,
    Pricing,
    QUESTION_TYPES,
    Question,
    VisibilityConfig,
)
from ..services.catalogue_service import ValidationResult

VALID_LOGIC = ('all', 'any')
VALID_ACTIONS = ('show', 'hide')


def _check_range(result: ValidationResult, where: str, low, high):
    if low is not None and high is not None and low > high:
        result.warnings.append(f"{where}: min ({low}) is greater than max ({high})")


def _check_visibility(
    result: ValidationResult,
    where: str,
    config: Optional[VisibilityConfig],
    known_keys: set[str],
):
    if not config:
        return

    if config.logic not in VALID_LOGIC:
        result.warnings.append(f"{where}: unknown logic '{config.logic}', treated as 'all'")
    if config.action not in VALID_ACTIONS:
        result.warnings.append(f"{where}: unknown action '{config.action}', treated as 'show'")

    for rule in config.rules:
        if rule.operator == Operator.UNKNOWN:
            result.warnings.append(f"{where}: unknown operator on rule for '{rule.question_key}', rule always passes")
        if rule.question_key not in known_keys:
            result.warnings.append(f"{where}: rule references unknown question '{rule.question_key}'")


def _check_catalogue_ref(
    result: ValidationResult,
    where: str,
    item_id: Optional[str],
    catalogue_ids: set[str],
):
    if item_id and item_id not in catalogue_ids:
        result.warnings.append(f"{where}: catalogue item '{item_id}' does not exist")


def validate_definitions(
    questions: list[Question],
    pricing: list[Pricing],
    catalogue_items: list[PriceCatalogueItem],
) -> ValidationResult:
    """
    Lint one site's definitions.

    Returns a ValidationResult; valid is False only when there are errors.
    """
    result = ValidationResult(valid=True)
    catalogue_ids = {item.id for item in catalogue_items}

    # Keys are unique per scope (category or product), not per site
    seen_keys = set()
    for q in questions:
        scoped_key = (q.category, q.product_slug, q.question_key)
        if scoped_key in seen_keys:
            result.add_error(f"Duplicate question_key '{q.question_key}' in {q.category or q.product_slug or 'shared questions'}")
        seen_keys.add(scoped_key)

    known_keys = {q.question_key for q in questions}

    for q in questions:
        where = f"Question '{q.question_key}'"

        if not q.question_key:
            result.add_error(f"Question '{q.label}' has no question_key")
        if q.type not in QUESTION_TYPES:
            result.add_error(f"{where}: unknown type '{q.type}'")

        _check_visibility(result, where, q.visibility_rules, known_keys)
        _check_range(result, f"{where} per-unit price", q.price_per_unit_min, q.price_per_unit_max)
        _check_catalogue_ref(result, where, q.catalogue_item_id, catalogue_ids)

        values = set()
        for option in q.options or []:
            option_where = f"{where} option '{option.value}'"
            if option.value in values:
                result.add_error(f"{where}: duplicate option value '{option.value}'")
            values.add(option.value)

            _check_visibility(result, option_where, option.visibility_rules, known_keys)
            _check_range(result, option_where, option.price_modifier_min, option.price_modifier_max)
            _check_catalogue_ref(result, option_where, option.catalogue_item_id, catalogue_ids)

    for p in pricing:
        where = f"Pricing '{p.category or p.product_slug or p.id}'"
        _check_range(result, where, p.base_price_min, p.base_price_max)
        for modifier in p.price_modifiers or []:
            if modifier.question_key not in known_keys:
                result.warnings.append(f"{where}: modifier references unknown question '{modifier.question_key}'")

    for item in catalogue_items:
        where = f"Catalogue item '{item.id}'"
        _check_range(result, where, item.price_min, item.price_max)
        if item.unit and item.unit not in CATALOGUE_UNITS:
            result.warnings.append(f"{where}: unknown unit '{item.unit}', priced flat")

    return result


def validate_site(store: ContentStore, site: str) -> ValidationResult:
    """Lint everything stored for a site."""
    if not store.site_exists(site):
        result = ValidationResult(valid=True)
        result.add_error(f"Site not found: {site}")
        return result

    return validate_definitions(
        store.get_questions(site),
        store.get_pricing(site),
        store.get_catalogue_items(site),
    )
