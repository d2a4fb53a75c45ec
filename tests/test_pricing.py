"""
Price engine tests: option resolution, dimension scaling, legacy modifiers.

All amounts are cents.
"""
import copy

import pytest

from configurator_tool.engine.models import (
    PriceCatalogueItem,
    PriceModifier,
    Pricing,
    Question,
    QuestionOption,
)
from configurator_tool.engine.pricing import calculate_price_from_config


@pytest.fixture
def pricing():
    return Pricing(base_price_min=5000, base_price_max=5000)


def select(key, *options, label=None):
    return Question(question_key=key, label=label or key, type="single-select", options=list(options))


def test_flat_option_price_is_added(pricing):
    questions = [select("kleur", QuestionOption(value="rood", label="Rood", price_modifier_min=1000, price_modifier_max=1500))]
    result = calculate_price_from_config(pricing, questions, {"kleur": "rood"})

    assert result.min == 6000
    assert result.max == 6500


def test_catalogue_item_scaled_by_area(pricing):
    item = PriceCatalogueItem(id="dak", price_min=200, price_max=300, unit="per m²")
    questions = [select("dak", QuestionOption(value="poly", label="Polycarbonaat", catalogue_item_id="dak"))]
    answers = {"length": 4, "width": 2, "dak": "poly"}

    result = calculate_price_from_config(pricing, questions, answers, [item])

    assert result.min == 5000 + 1600
    assert result.max == 5000 + 2400
    assert result.breakdown.modifiers[0].label == "Polycarbonaat (8.0 m²)"


def test_catalogue_item_per_meter_uses_length(pricing):
    item = PriceCatalogueItem(id="led", price_min=1000, price_max=1500, unit="per m")
    questions = [select("verlichting", QuestionOption(value="led", label="LED", catalogue_item_id="led"))]

    result = calculate_price_from_config(pricing, questions, {"lengte": 3.5, "verlichting": "led"}, [item])

    assert result.min == 5000 + 3500
    assert result.max == 5000 + 5250
    assert result.breakdown.modifiers[0].label == "LED (3.5 m)"


def test_per_area_item_without_dimensions_is_flat(pricing):
    item = PriceCatalogueItem(id="dak", price_min=200, price_max=300, unit="per m²")
    questions = [select("dak", QuestionOption(value="poly", label="Poly", catalogue_item_id="dak"))]

    result = calculate_price_from_config(pricing, questions, {"dak": "poly"}, [item])

    assert (result.min, result.max) == (5200, 5300)
    assert result.breakdown.modifiers[0].label == "Poly"


def test_deleted_catalogue_item_contributes_nothing(pricing):
    # The manual fields are ignored once a catalogue item is referenced
    option = QuestionOption(value="poly", label="Poly", catalogue_item_id="gone", price_modifier_min=999)
    questions = [select("dak", option)]

    result = calculate_price_from_config(pricing, questions, {"dak": "poly"}, [])

    assert (result.min, result.max) == (5000, 5000)
    assert result.breakdown.modifiers == []


def test_end_to_end_single_select():
    pricing = Pricing(base_price_min=500000, base_price_max=600000)
    questions = [select(
        "finish",
        QuestionOption(value="lak", label="Lak", price_modifier_min=10000, price_modifier_max=15000),
        QuestionOption(value="vernis", label="Vernis", price_modifier_min=0, price_modifier_max=0),
    )]
    questions[0].required = True

    result = calculate_price_from_config(pricing, questions, {"finish": "lak"})

    assert (result.min, result.max) == (510000, 615000)
    assert len(result.breakdown.modifiers) == 1
    assert result.breakdown.modifiers[0].label == "Lak"
    assert result.breakdown.modifiers[0].amount == 10000


def test_min_only_option_uses_min_for_max(pricing):
    questions = [select("a", QuestionOption(value="x", label="X", price_modifier_min=700))]
    result = calculate_price_from_config(pricing, questions, {"a": "x"})
    assert (result.min, result.max) == (5700, 5700)


def test_zero_max_falls_back_to_min(pricing):
    questions = [select("a", QuestionOption(value="x", label="X", price_modifier_min=700, price_modifier_max=0))]
    result = calculate_price_from_config(pricing, questions, {"a": "x"})
    assert result.max == 5700


def test_deprecated_flat_modifier(pricing):
    questions = [select("a", QuestionOption(value="x", label="X", price_modifier=250))]
    result = calculate_price_from_config(pricing, questions, {"a": "x"})
    assert (result.min, result.max) == (5250, 5250)


def test_unpriced_option_adds_no_line(pricing):
    questions = [select("a", QuestionOption(value="x", label="X"))]
    result = calculate_price_from_config(pricing, questions, {"a": "x"})
    assert result.breakdown.modifiers == []


def test_multi_select_prices_each_value(pricing):
    question = Question(question_key="extras", label="Extra's", type="multi-select", options=[
        QuestionOption(value="a", label="A", price_modifier_min=100, price_modifier_max=200),
        QuestionOption(value="b", label="B", price_modifier_min=300, price_modifier_max=400),
    ])
    result = calculate_price_from_config(pricing, [question], {"extras": ["b", "a", "missing"]})

    assert (result.min, result.max) == (5400, 5600)
    assert [line.label for line in result.breakdown.modifiers] == ["B", "A"]


def test_answer_type_must_match_question_type(pricing):
    single = select("a", QuestionOption(value="x", label="X", price_modifier_min=100))
    multi = Question(question_key="b", label="B", type="multi-select", options=[
        QuestionOption(value="y", label="Y", price_modifier_min=100),
    ])
    result = calculate_price_from_config(pricing, [single, multi], {"a": ["x"], "b": "y"})
    assert result.min == 5000


def test_number_question_priced_per_unit(pricing):
    question = Question(question_key="spots", label="Spots", type="number",
                        price_per_unit_min=4500, price_per_unit_max=6000)
    result = calculate_price_from_config(pricing, [question], {"spots": 4})

    assert (result.min, result.max) == (5000 + 18000, 5000 + 24000)
    assert result.breakdown.modifiers[0].label == "Spots: 4"


def test_dimension_questions_are_never_priced(pricing):
    question = Question(question_key="lengte_gevel", label="Lengte", type="number",
                        price_per_unit_min=1000, price_per_unit_max=1000)
    result = calculate_price_from_config(pricing, [question], {"lengte_gevel": 6})
    assert result.min == 5000


def test_answers_for_unknown_questions_are_ignored(pricing):
    result = calculate_price_from_config(pricing, [], {"removed": "x", "length": 3})
    assert (result.min, result.max) == (5000, 5000)


def test_legacy_modifiers_add_to_option_pricing(pricing):
    pricing.price_modifiers = [PriceModifier(question_key="a", option_value="x", modifier=1000)]
    questions = [select("a", QuestionOption(value="x", label="X", price_modifier_min=100, price_modifier_max=200))]

    result = calculate_price_from_config(pricing, questions, {"a": "x"})

    assert (result.min, result.max) == (5000 + 100 + 1000, 5000 + 200 + 1000)
    assert [(line.label, line.amount) for line in result.breakdown.modifiers] == [("X", 100), ("X", 1000)]


def test_legacy_modifier_matches_multi_select_and_falls_back_to_value_label(pricing):
    pricing.price_modifiers = [
        PriceModifier(question_key="extras", option_value="led", modifier=500),
        PriceModifier(question_key="extras", option_value="lock", modifier=700),
    ]
    result = calculate_price_from_config(pricing, [], {"extras": ["led"]})

    assert result.min == 5500
    assert result.breakdown.modifiers[0].label == "led"


def test_breakdown_follows_answer_order(pricing):
    questions = [
        select("a", QuestionOption(value="x", label="First", price_modifier_min=1)),
        select("b", QuestionOption(value="y", label="Second", price_modifier_min=2)),
    ]
    result = calculate_price_from_config(pricing, questions, {"b": "y", "a": "x"})
    assert [line.label for line in result.breakdown.modifiers] == ["Second", "First"]


def test_min_greater_than_max_is_not_clamped(pricing):
    questions = [select("a", QuestionOption(value="x", label="X", price_modifier_min=900, price_modifier_max=100))]
    result = calculate_price_from_config(pricing, questions, {"a": "x"})
    assert (result.min, result.max) == (5900, 5100)


def test_calculation_is_pure(pricing):
    item = PriceCatalogueItem(id="dak", price_min=200, price_max=300, unit="per m²")
    questions = [select("dak", QuestionOption(value="poly", label="Poly", catalogue_item_id="dak"))]
    answers = {"length": 4, "width": 2, "dak": "poly"}
    snapshot = copy.deepcopy((pricing, questions, answers))

    first = calculate_price_from_config(pricing, questions, answers, [item])
    second = calculate_price_from_config(pricing, questions, answers, [item])

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert (pricing, questions, answers) == snapshot


def test_area_label_rounds_ties_up(pricing):
    item = PriceCatalogueItem(id="dak", price_min=200, price_max=300, unit="per m²")
    questions = [select("dak", QuestionOption(value="poly", label="Poly", catalogue_item_id="dak"))]

    result = calculate_price_from_config(pricing, questions, {"length": 2.5, "width": 2.5, "dak": "poly"}, [item])

    assert result.breakdown.modifiers[0].label == "Poly (6.3 m²)"
    assert result.min == 5000 + 1250
