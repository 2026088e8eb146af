from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.database import get_session
from app.models.user import User
from app.schemas.order_schemas import DiscountRead
from app.services.discount_service import validate_discount_code
from app.utils.token import get_current_user

router = APIRouter()


@router.get("/validate/{code}")
def validate_code(
    code: str,
    session: Session = Depends(get_session),
    _: User = Depends(get_current_user)
):
    discount = validate_discount_code(session, code)

    return {
        "message": "Discount code is valid",
        "data": DiscountRead.model_validate(discount),
    }
