from configurator_tool.engine.models import (
    Operator,
    PriceCatalogueItem,
    PriceModifier,
    Pricing,
    Question,
    QuestionOption,
    VisibilityConfig,
    VisibilityRule,
)
from configurator_tool.rules.validate_definitions import validate_definitions, validate_site


def test_fixture_site_is_clean(store):
    result = validate_site(store, "test")
    assert result.valid, result.errors
    assert result.warnings == []


def test_unknown_site(store):
    result = validate_site(store, "nope")
    assert not result.valid


def test_duplicate_keys_and_options_are_errors():
    questions = [
        Question(question_key="kleur", label="Kleur", type="single-select", category="veranda", options=[
            QuestionOption(value="wit", label="Wit"),
            QuestionOption(value="wit", label="Ook wit"),
        ]),
        Question(question_key="kleur", label="Kleur", type="text", category="veranda"),
        # Same key in another category is fine
        Question(question_key="kleur", label="Kleur", type="text", category="carport"),
    ]
    result = validate_definitions(questions, [], [])

    assert not result.valid
    assert len(result.errors) == 2


def test_unknown_question_type_is_error():
    result = validate_definitions([Question(question_key="a", label="A", type="slider")], [], [])
    assert any("unknown type" in e for e in result.errors)


def test_rule_problems_are_warnings():
    visibility = VisibilityConfig(
        rules=[
            VisibilityRule(question_key="ghost", operator=Operator.EQUALS, value="x"),
            VisibilityRule(question_key="a", operator=Operator("regex")),
        ],
        logic="some",
        action="toggle",
    )
    questions = [
        Question(question_key="a", label="A", type="text"),
        Question(question_key="b", label="B", type="text", visibility_rules=visibility),
    ]
    result = validate_definitions(questions, [], [])

    assert result.valid
    assert len(result.warnings) == 4


def test_dangling_references_and_inverted_ranges_are_warnings():
    questions = [
        Question(question_key="dak", label="Dak", type="single-select", options=[
            QuestionOption(value="glas", label="Glas", catalogue_item_id="deleted"),
            QuestionOption(value="poly", label="Poly", price_modifier_min=500, price_modifier_max=100),
        ]),
        Question(question_key="spots", label="Spots", type="number", price_per_unit_min=10, price_per_unit_max=5),
    ]
    pricing = [Pricing(base_price_min=2, base_price_max=1, category="veranda",
                       price_modifiers=[PriceModifier(question_key="gone", option_value="x", modifier=1)])]
    catalogue = [PriceCatalogueItem(id="x", price_min=9, price_max=1, unit="per uur")]

    result = validate_definitions(questions, pricing, catalogue)

    assert result.valid
    assert len(result.warnings) == 7
