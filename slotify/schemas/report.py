from pydantic import BaseModel
from datetime import datetime


class OccupiedSlot(BaseModel):
    slot_code: str
    vehicle_id: str


class DailyReportOut(BaseModel):
    generated_at: datetime
    total_slots: int
    used_slots: int
    empty_slots: int
    occupied_slots: list[OccupiedSlot]
