# proshift/modules/deliveries/schemas.py
from pydantic import BaseModel
from typing import Dict, Any, List
from proshift.shared.schemas.common import BaseResponse

class AssignedParcelsResponse(BaseResponse):
    parcels: List[Dict[str, Any]]
    count: int

class DeliveryStatusResponse(BaseResponse):
    parcel_id: str
    delivery_status: str
    rider_work_status: str

class CompletedDeliveriesResponse(BaseResponse):
    parcels: List[Dict[str, Any]]
    count: int
    total_earning: int

class CashoutRequestResponse(BaseResponse):
    parcel_id: str
    cashout_status: str
    earning: int

class EarningsSummary(BaseModel):
    total_earning: int
    today_earning: int
    cashed_out: int
    pending_cashout: int
    available: int
    delivered_count: int
    today_count: int

class EarningsResponse(BaseResponse):
    rider_email: str
    earnings: EarningsSummary

class DailyCount(BaseModel):
    date: str
    count: int

class WeeklyDeliveriesResponse(BaseResponse):
    rider_email: str
    start_date: str
    end_date: str
    days: List[DailyCount]
    total: int
