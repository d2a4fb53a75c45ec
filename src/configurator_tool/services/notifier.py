"""
Quote Notifier - Customer and admin emails for a quote request.

Sends plain-text messages over SMTP with aiosmtplib. Delivery is best
effort: every send returns True/False and logs failures instead of raising.
In test mode all mail goes to the configured test address.
"""
import logging
from dataclasses import dataclass
from email.message import EmailMessage

import aiosmtplib

from ..config.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class ConfigurationItem:
    """One answered question, as shown in the emails."""
    label: str
    value: str


def price_range_text(price_min: str, price_max: str) -> str:
    return price_min if price_min == price_max else f"{price_min} - {price_max}"


def render_customer_quote(
    customer_name: str,
    product_name: str,
    configuration: list[ConfigurationItem],
    price_min: str,
    price_max: str,
) -> str:
    lines = [
        "Uw offerte aanvraag",
        "",
        f"Beste {customer_name},",
        "",
        "Bedankt voor uw offerte aanvraag. Hieronder vindt u een overzicht van",
        "uw configuratie en een prijsindicatie.",
        "",
        f"Prijsschatting: {price_range_text(price_min, price_max)}",
        "Dit is een indicatieve prijsschatting. De uiteindelijke prijs is",
        "afhankelijk van een plaatsbezoek.",
        "",
        "Uw configuratie",
        f"  Product: {product_name}",
    ]
    lines.extend(f"  {item.label}: {item.value}" for item in configuration)
    lines.extend([
        "",
        "Met vriendelijke groeten,",
        "VPG",
    ])
    return "\n".join(lines)


def render_admin_notification(
    customer_name: str,
    customer_email: str,
    customer_phone: str,
    customer_address: str,
    product_name: str,
    configuration: list[ConfigurationItem],
    price_min: str,
    price_max: str,
) -> str:
    lines = [
        "Nieuwe offerte aanvraag",
        "Via de online configurator",
        "",
        f"Prijsschatting: {price_range_text(price_min, price_max)}",
        "",
        "Klantgegevens",
        f"  Naam: {customer_name}",
        f"  E-mail: {customer_email}",
        f"  Telefoon: {customer_phone}",
        f"  Adres: {customer_address}",
        "",
        "Configuratie",
        f"  Product: {product_name}",
    ]
    lines.extend(f"  {item.label}: {item.value}" for item in configuration)
    return "\n".join(lines)


class QuoteNotifier:
    """Sends quote emails through the configured SMTP server."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def recipient(self, email: str) -> str:
        """In test mode, all emails go to the test address."""
        return self.settings.test_email if self.settings.is_test_mode else email

    async def _send(self, to: str, subject: str, body: str) -> bool:
        if not self.settings.smtp_host:
            logger.warning("SMTP host not configured, not sending '%s' to %s", subject, to)
            return False

        msg = EmailMessage()
        msg["From"] = self.settings.from_address
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content(body)

        try:
            await aiosmtplib.send(
                msg,
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                username=self.settings.smtp_username,
                password=self.settings.smtp_password,
                start_tls=bool(self.settings.smtp_username),
            )
        except Exception as exc:
            logger.error("Failed to send '%s' to %s: %s", subject, to, exc)
            return False

        logger.info("Sent '%s' to %s", subject, to)
        return True

    async def send_customer_quote(
        self,
        customer_name: str,
        customer_email: str,
        product_name: str,
        configuration: list[ConfigurationItem],
        price_min: str,
        price_max: str,
    ) -> bool:
        body = render_customer_quote(customer_name, product_name, configuration, price_min, price_max)
        return await self._send(
            self.recipient(customer_email),
            f"{self.settings.subject_quote_customer} - {product_name}",
            body,
        )

    async def send_admin_notification(
        self,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        customer_address: str,
        product_name: str,
        configuration: list[ConfigurationItem],
        price_min: str,
        price_max: str,
    ) -> bool:
        body = render_admin_notification(
            customer_name, customer_email, customer_phone or "-", customer_address or "-",
            product_name, configuration, price_min, price_max,
        )
        return await self._send(
            self.recipient(self.settings.quote_recipient),
            f"{self.settings.subject_quote_admin}: {customer_name} - {product_name}",
            body,
        )
