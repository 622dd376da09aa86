# eventpass/api/v1/endpoints/registrations.py
from typing import Union

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventpass.db.session import get_db
from eventpass.schemas.registration import (
    FreeRegistrationResponse,
    PaidRegistrationResponse,
    RegistrationRequest,
)
from eventpass.services.ticketing.issuance_service import ticket_issuance_service

router = APIRouter(tags=["Registrations"])


@router.post(
    "/register",
    response_model=Union[FreeRegistrationResponse, PaidRegistrationResponse],
)
async def register(registration_in: RegistrationRequest, db: Session = Depends(get_db)):
    """
    Register an attendee for an event.

    Free ticket types are issued immediately with their QR code. Paid ones
    come back pending with a client secret for completing the payment.
    """
    return await ticket_issuance_service.register(db, registration_in)
