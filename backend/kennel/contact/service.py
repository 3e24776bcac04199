from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime
from typing import Callable

from kennel.common.exceptions import ApiException
from kennel.common.time import utcnow
from kennel.contact.schemas import ContactRequest, ContactSubmission

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DEFAULT_SUBJECT = "網站聯絡表單"


class ContactService:
    def __init__(self, clock: Callable[[], datetime] = utcnow):
        self.clock = clock

    def submit(self, request: ContactRequest) -> ContactSubmission:
        if not EMAIL_PATTERN.match(request.email):
            raise ApiException(status_code=400, code="INVALID_EMAIL", message="請提供有效的 email 地址")

        submission = ContactSubmission(
            id=uuid.uuid4().hex,
            name=request.name,
            email=request.email.lower(),
            phone=request.phone or None,
            subject=request.subject or DEFAULT_SUBJECT,
            message=request.message,
            submitted_at=self.clock(),
        )
        # No mail integration yet; the log line is the delivery record.
        logger.info(
            "contact_submitted id=%s email=%s subject=%s submission=%s",
            submission.id,
            submission.email,
            submission.subject,
            submission.model_dump(mode="json"),
        )
        return submission
