# portal/schemas/profile.py

from typing import Optional

from pydantic import BaseModel

from portal.schemas.application import CamelModel


# ------------------------------------------------------------
# PAYMENT
# ------------------------------------------------------------
class PaymentCreate(CamelModel):
    student_id: str
    transaction_code: str
    receipt_file_path: Optional[str] = None

    def to_wire(self) -> dict:
        # receiptFilePath is always sent, null when missing
        return {
            "studentId": self.student_id,
            "transactionCode": self.transaction_code,
            "receiptFilePath": self.receipt_file_path or None,
        }


# ------------------------------------------------------------
# COMPLAINT
# ------------------------------------------------------------
class ComplaintCreate(BaseModel):
    title: str
    message: str
