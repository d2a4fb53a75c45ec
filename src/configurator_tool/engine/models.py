"""
Data models for the configurator engine.

Uses dataclasses for structured, type-safe data representation.
Definitions arrive as JSON: option, rule and modifier fields use camelCase keys,
question, pricing and catalogue fields use snake_case.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

AnswerValue = Union[str, list[str], int, float, None]
Answers = dict[str, AnswerValue]

QUESTION_TYPES = ('single-select', 'multi-select', 'text', 'number')

UNIT_PER_PIECE = "per stuk"
UNIT_PER_METER = "per m"
UNIT_PER_SQUARE_METER = "per m²"
CATALOGUE_UNITS = (UNIT_PER_PIECE, UNIT_PER_METER, UNIT_PER_SQUARE_METER)


class Operator(str, Enum):
    """Comparison operators a visibility rule can use."""
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    INCLUDES = "includes"
    NOT_INCLUDES = "not_includes"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    # Anything an author typed that we don't recognise
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        return cls.UNKNOWN


@dataclass
class VisibilityRule:
    """A single condition on another question's answer."""
    question_key: str
    operator: Operator
    value: Union[str, int, float, None] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'VisibilityRule':
        return cls(
            question_key=data.get('questionKey', ''),
            operator=Operator(data.get('operator')),
            value=data.get('value'),
        )

    def to_dict(self) -> dict:
        out = {'questionKey': self.question_key, 'operator': self.operator.value}
        if self.value is not None:
            out['value'] = self.value
        return out


@dataclass
class VisibilityConfig:
    """Rules attached to a question or option, combined with all/any logic."""
    rules: list[VisibilityRule] = field(default_factory=list)
    logic: str = "all"  # "all" or "any"
    action: str = "show"  # "show" or "hide"

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional['VisibilityConfig']:
        if not data:
            return None
        return cls(
            rules=[VisibilityRule.from_dict(r) for r in data.get('rules') or []],
            logic=data.get('logic') or "all",
            action=data.get('action') or "show",
        )

    def to_dict(self) -> dict:
        return {
            'rules': [r.to_dict() for r in self.rules],
            'logic': self.logic,
            'action': self.action,
        }


@dataclass
class QuestionOption:
    """A selectable choice within a select question."""
    value: str
    label: str
    image: Optional[str] = None
    catalogue_item_id: Optional[str] = None
    price_modifier_min: Optional[float] = None
    price_modifier_max: Optional[float] = None
    price_modifier: Optional[float] = None  # deprecated flat amount for both ends
    visibility_rules: Optional[VisibilityConfig] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'QuestionOption':
        return cls(
            value=str(data.get('value', '')),
            label=data.get('label') or str(data.get('value', '')),
            image=data.get('image'),
            catalogue_item_id=data.get('catalogueItemId') or None,
            price_modifier_min=data.get('priceModifierMin'),
            price_modifier_max=data.get('priceModifierMax'),
            price_modifier=data.get('priceModifier'),
            visibility_rules=VisibilityConfig.from_dict(data.get('visibility_rules')),
        )

    def to_dict(self) -> dict:
        out = {'value': self.value, 'label': self.label}
        if self.image:
            out['image'] = self.image
        if self.catalogue_item_id:
            out['catalogueItemId'] = self.catalogue_item_id
        if self.price_modifier_min is not None:
            out['priceModifierMin'] = self.price_modifier_min
        if self.price_modifier_max is not None:
            out['priceModifierMax'] = self.price_modifier_max
        if self.price_modifier is not None:
            out['priceModifier'] = self.price_modifier
        if self.visibility_rules:
            out['visibility_rules'] = self.visibility_rules.to_dict()
        return out


@dataclass
class Question:
    """A configurator question as authored by an admin."""
    question_key: str
    label: str
    type: str  # single-select, multi-select, text, number
    options: Optional[list[QuestionOption]] = None
    required: bool = False
    visibility_rules: Optional[VisibilityConfig] = None

    # Per-unit pricing, only meaningful for type="number"
    price_per_unit_min: Optional[float] = None
    price_per_unit_max: Optional[float] = None
    catalogue_item_id: Optional[str] = None

    # Authoring metadata
    id: Optional[str] = None
    category: Optional[str] = None
    product_slug: Optional[str] = None  # deprecated, use category
    subtitle: Optional[str] = None
    heading_level: str = "h2"
    display_type: str = "select"
    order_rank: int = 0

    def find_option(self, value: str) -> Optional[QuestionOption]:
        """Get the option with the given value, if any."""
        for option in self.options or []:
            if option.value == value:
                return option
        return None

    @classmethod
    def from_dict(cls, data: dict) -> 'Question':
        options = data.get('options')
        return cls(
            question_key=data.get('question_key', ''),
            label=data.get('label', ''),
            type=data.get('type', 'text'),
            options=[QuestionOption.from_dict(o) for o in options] if options is not None else None,
            required=bool(data.get('required', False)),
            visibility_rules=VisibilityConfig.from_dict(data.get('visibility_rules')),
            price_per_unit_min=data.get('price_per_unit_min'),
            price_per_unit_max=data.get('price_per_unit_max'),
            catalogue_item_id=data.get('catalogue_item_id') or None,
            id=data.get('id'),
            category=data.get('category'),
            product_slug=data.get('product_slug'),
            subtitle=data.get('subtitle'),
            heading_level=data.get('heading_level') or "h2",
            display_type=data.get('display_type') or "select",
            order_rank=int(data.get('order_rank') or 0),
        )

    def to_public_dict(self) -> dict:
        """Shape served to the wizard (subtitle is exposed as description)."""
        return {
            'question_key': self.question_key,
            'label': self.label,
            'type': self.type,
            'display_type': self.display_type or "select",
            'options': [o.to_dict() for o in self.options] if self.options is not None else None,
            'required': self.required,
            'description': self.subtitle,
            'visibility_rules': self.visibility_rules.to_dict() if self.visibility_rules else None,
        }


@dataclass
class PriceCatalogueItem:
    """A priced item in the site's price catalogue (cents)."""
    id: str
    price_min: float
    price_max: float
    unit: Optional[str] = None  # "per stuk", "per m", "per m²" or None for flat
    name: str = ""
    category: str = ""
    image: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceCatalogueItem':
        return cls(
            id=str(data['id']),
            price_min=data.get('price_min') or 0,
            price_max=data.get('price_max') or 0,
            unit=data.get('unit') or None,
            name=data.get('name') or "",
            category=data.get('category') or "",
            image=data.get('image') or None,
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )


@dataclass
class PriceModifier:
    """Legacy per-option modifier stored on the pricing definition."""
    question_key: str
    option_value: str
    modifier: float

    @classmethod
    def from_dict(cls, data: dict) -> 'PriceModifier':
        return cls(
            question_key=data.get('questionKey', ''),
            option_value=str(data.get('optionValue', '')),
            modifier=data.get('modifier') or 0,
        )


@dataclass
class Pricing:
    """Base price range for a product/category (cents)."""
    base_price_min: float
    base_price_max: float
    price_modifiers: Optional[list[PriceModifier]] = None  # deprecated
    id: Optional[str] = None
    category: Optional[str] = None
    product_slug: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Pricing':
        modifiers = data.get('price_modifiers')
        return cls(
            base_price_min=data.get('base_price_min') or 0,
            base_price_max=data.get('base_price_max') or 0,
            price_modifiers=[PriceModifier.from_dict(m) for m in modifiers] if modifiers else None,
            id=data.get('id'),
            category=data.get('category'),
            product_slug=data.get('product_slug'),
        )


@dataclass
class BreakdownLine:
    """One priced contribution in the breakdown."""
    label: str
    amount: float


@dataclass
class PriceBreakdown:
    base_min: float
    base_max: float
    modifiers: list[BreakdownLine] = field(default_factory=list)


@dataclass
class PriceCalculationResult:
    """Complete result of a price calculation (cents)."""
    min: float
    max: float
    breakdown: PriceBreakdown

    @classmethod
    def zero(cls) -> 'PriceCalculationResult':
        """The "no pricing configured" result."""
        return cls(min=0, max=0, breakdown=PriceBreakdown(base_min=0, base_max=0, modifiers=[]))

    def to_dict(self) -> dict:
        return {
            'min': self.min,
            'max': self.max,
            'breakdown': {
                'base_min': self.breakdown.base_min,
                'base_max': self.breakdown.base_max,
                'modifiers': [
                    {'label': line.label, 'amount': line.amount}
                    for line in self.breakdown.modifiers
                ],
            },
        }


@dataclass
class QuoteSubmission:
    """A stored quote request."""
    id: str
    configuration: dict
    price_estimate_min: Optional[float]
    price_estimate_max: Optional[float]
    contact_name: str
    contact_email: str
    contact_phone: Optional[str] = None
    contact_address: Optional[str] = None
    site_id: str = ""
    created_at: Optional[str] = None
