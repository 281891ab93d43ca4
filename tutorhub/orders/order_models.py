from enum import Enum
from typing import Optional

from pydantic import Field

from tutorhub.common import CamelModel, ObjectIdStr


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


class BookOrderCreate(CamelModel):
    student_id: ObjectIdStr
    book_id: ObjectIdStr
    # Delivery contact
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    preferred_bookstore: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus
