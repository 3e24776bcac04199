from __future__ import annotations

from fastapi import APIRouter

from kennel.common.responses import ApiResponse
from kennel.contact.schemas import ContactRequest
from kennel.contact.service import ContactService

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", response_model=ApiResponse)
def submit_contact(request: ContactRequest) -> ApiResponse:
    service = ContactService()
    submission = service.submit(request)
    return ApiResponse.ok({"id": submission.id, "submitted": True}, "您的訊息已成功送出，我們會盡快回覆您")
