# barbershop/routers/services_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop import crud
from barbershop.db import get_session
from barbershop.schemas import ServicePublic

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(session: Optional[Session] = Depends(get_session)):
    return crud.get_all_services(session)
