# proshift/modules/payments/repository.py
from typing import Any, Dict, List
from datetime import datetime

from pymongo import DESCENDING
from pymongo.database import Database

from proshift.shared.database.documents import PAYMENTS

class PaymentsRepository:
    def __init__(self, db: Database):
        self.collection = db[PAYMENTS]

    def create_payment(self, payment_data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        document = {**payment_data, "payment_date": now}
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def list_by_email(self, email: str) -> List[Dict[str, Any]]:
        return list(self.collection.find({"userEmail": email}).sort("payment_date", DESCENDING))
