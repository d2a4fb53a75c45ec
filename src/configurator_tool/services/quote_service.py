"""
Quote Service - Submits a configured quote request.

Critical path: price the configuration and store the submission. The two
notification emails are sent concurrently afterwards; a failing email is
reported per channel and never fails the submission.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..engine.formatting import format_price, number_to_text
from ..engine.models import Answers, AnswerValue, PriceCalculationResult, Question
from ..engine.pricing_engine import PricingEngine
from .notifier import ConfigurationItem, QuoteNotifier
from .submission_store import SubmissionStore

logger = logging.getLogger(__name__)


@dataclass
class ContactDetails:
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass
class SubmitOutcome:
    """What the submit endpoint reports back."""
    submission_id: str
    price: PriceCalculationResult
    emails: dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'success': True,
            'submission_id': self.submission_id,
            'price': {
                'min': self.price.min,
                'max': self.price.max,
                'min_formatted': format_price(self.price.min),
                'max_formatted': format_price(self.price.max),
            },
            'emails': {
                'customer': self.emails.get('customer', False),
                'admin': self.emails.get('admin', False),
            },
        }


def format_answer_value(value: AnswerValue) -> str:
    """Format an answer for display in an email."""
    if value is None:
        return "-"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) if value else "-"
    if isinstance(value, (int, float)):
        return number_to_text(value)
    return str(value)


def build_configuration_items(questions: list[Question], answers: Answers) -> list[ConfigurationItem]:
    """Label each answer with its question and option labels."""
    by_key = {q.question_key: q for q in questions}
    items = []

    for key, value in answers.items():
        question = by_key.get(key)
        display_value = format_answer_value(value)

        if question and question.options and isinstance(value, str):
            option = question.find_option(value)
            if option:
                display_value = option.label
        elif question and question.options and isinstance(value, list):
            labels = []
            for v in value:
                option = question.find_option(v)
                labels.append(option.label if option else v)
            display_value = ", ".join(labels)

        items.append(ConfigurationItem(
            label=question.label if question and question.label else key.replace("_", " "),
            value=display_value,
        ))

    return items


def product_name(product_slug: str) -> str:
    """Readable product name from its slug ("glazen-schuifwand" -> "Glazen Schuifwand")."""
    return " ".join(word[:1].upper() + word[1:] for word in product_slug.split("-"))


class QuoteService:
    """Prices, stores and announces quote requests."""

    def __init__(self, engine: PricingEngine, submissions: SubmissionStore, notifier: QuoteNotifier):
        self.engine = engine
        self.submissions = submissions
        self.notifier = notifier

    async def submit(
        self,
        product_slug: str,
        answers: Answers,
        contact: ContactDetails,
        site: str,
    ) -> SubmitOutcome:
        """
        Submit a quote request.

        The price is recomputed from the answers as given; visibility
        filtering already happened in the wizard flow.
        """
        price = self.engine.calculate(product_slug, answers, site)
        questions = self.engine.resolve_questions(product_slug, site)
        configuration = build_configuration_items(questions, answers)
        name = product_name(product_slug)

        submission = self.submissions.create(
            site,
            configuration={'product_slug': product_slug, 'answers': answers},
            price_estimate_min=price.min,
            price_estimate_max=price.max,
            contact_name=contact.name,
            contact_email=contact.email.lower(),
            contact_phone=contact.phone,
            contact_address=contact.address,
        )

        price_min = format_price(price.min)
        price_max = format_price(price.max)

        customer_sent, admin_sent = await asyncio.gather(
            self.notifier.send_customer_quote(
                customer_name=contact.name,
                customer_email=contact.email,
                product_name=name,
                configuration=configuration,
                price_min=price_min,
                price_max=price_max,
            ),
            self.notifier.send_admin_notification(
                customer_name=contact.name,
                customer_email=contact.email,
                customer_phone=contact.phone,
                customer_address=contact.address,
                product_name=name,
                configuration=configuration,
                price_min=price_min,
                price_max=price_max,
            ),
            return_exceptions=True,
        )

        emails = {}
        for channel, outcome in (('customer', customer_sent), ('admin', admin_sent)):
            if isinstance(outcome, BaseException):
                logger.error("Error sending %s quote email: %s", channel, outcome)
                emails[channel] = False
            else:
                emails[channel] = bool(outcome)

        return SubmitOutcome(submission_id=submission.id, price=price, emails=emails)
