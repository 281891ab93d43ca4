from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from tutorhub.common import CamelModel, ObjectIdStr
from tutorhub.database import LESSONS, SUBSCRIPTIONS

# ==================== ENUMS ====================

class TransferStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


class ItemType(str, Enum):
    LESSON = "Lesson"
    SUBSCRIPTION = "Subscription"


# itemType tag -> collection holding the purchased item
ITEM_COLLECTIONS = {
    ItemType.LESSON.value: LESSONS,
    ItemType.SUBSCRIPTION.value: SUBSCRIPTIONS,
}

# ==================== PAYMENT METHODS ====================

class PaymentMethodCreate(CamelModel):
    name: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1, description="Control password, stored hashed")


class PaymentMethodDelete(CamelModel):
    password: Optional[str] = None

# ==================== TRANSFER REQUESTS ====================

class TransferRequestCreate(CamelModel):
    """Wallet top-up reported by a student after paying outside the platform"""
    student_id: ObjectIdStr
    amount: float = Field(..., gt=0)
    payment_method_id: ObjectIdStr
    transaction_number: str = Field(..., min_length=1)
    transfer_time: datetime
    message: Optional[str] = None
    receipt_image_key: Optional[str] = None


class TransferDecision(CamelModel):
    support_id: ObjectIdStr

# ==================== PURCHASES ====================

class PurchaseCreate(CamelModel):
    student_id: ObjectIdStr
    item_type: ItemType
    item_id: ObjectIdStr
