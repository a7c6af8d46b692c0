from typing import List

from app.schemas.base import CamelModel
from app.schemas.lead import LeadOut


class DashboardOut(CamelModel):
    total_leads: int
    total_indications: int
    total_clicks: int
    conversion_rate: int
    recent_leads: List[LeadOut]
