"""
Submission Store - Persists quote requests per site.

Submissions are appended to <data_dir>/sites/<site>/quote_submissions.csv;
the configuration (product slug + answers) is stored as a JSON column.
"""
import json
import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from ..engine.models import QuoteSubmission

logger = logging.getLogger(__name__)

SUBMISSION_COLUMNS = [
    'id', 'site_id', 'created_at', 'configuration', 'price_estimate_min',
    'price_estimate_max', 'contact_name', 'contact_email', 'contact_phone',
    'contact_address'
]


class SubmissionStore:
    """Append-only CSV store for quote submissions."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def path(self, site: str) -> Path:
        return self.data_dir / 'sites' / site / 'quote_submissions.csv'

    def create(
        self,
        site: str,
        configuration: dict,
        contact_name: str,
        contact_email: str,
        price_estimate_min: Optional[float] = None,
        price_estimate_max: Optional[float] = None,
        contact_phone: Optional[str] = None,
        contact_address: Optional[str] = None,
    ) -> QuoteSubmission:
        """Store a new submission and return it with its generated id."""
        submission = QuoteSubmission(
            id=str(uuid.uuid4()),
            configuration=configuration,
            price_estimate_min=price_estimate_min,
            price_estimate_max=price_estimate_max,
            contact_name=contact_name,
            contact_email=contact_email,
            contact_phone=contact_phone,
            contact_address=contact_address,
            site_id=site,
            created_at=datetime.now().isoformat(timespec='seconds'),
        )

        row = {
            'id': submission.id,
            'site_id': submission.site_id,
            'created_at': submission.created_at,
            'configuration': json.dumps(configuration, ensure_ascii=False),
            'price_estimate_min': price_estimate_min,
            'price_estimate_max': price_estimate_max,
            'contact_name': contact_name,
            'contact_email': contact_email,
            'contact_phone': contact_phone,
            'contact_address': contact_address,
        }

        path = self.path(site)
        path.parent.mkdir(parents=True, exist_ok=True)
        pd.DataFrame([row], columns=SUBMISSION_COLUMNS).to_csv(
            path, mode='a', header=not path.exists(), index=False
        )

        logger.info("Stored quote submission %s for site %s", submission.id, site)
        return submission

    def list(self, site: str) -> list[QuoteSubmission]:
        """All submissions for a site, oldest first."""
        path = self.path(site)
        if not path.exists():
            return []

        df = pd.read_csv(path, dtype=str).fillna('')
        submissions = []
        for row in df.to_dict(orient='records'):
            submissions.append(QuoteSubmission(
                id=row['id'],
                configuration=json.loads(row['configuration']) if row['configuration'] else {},
                price_estimate_min=float(row['price_estimate_min']) if row['price_estimate_min'] else None,
                price_estimate_max=float(row['price_estimate_max']) if row['price_estimate_max'] else None,
                contact_name=row['contact_name'],
                contact_email=row['contact_email'],
                contact_phone=row['contact_phone'] or None,
                contact_address=row['contact_address'] or None,
                site_id=row['site_id'],
                created_at=row['created_at'] or None,
            ))
        return submissions
