from datetime import datetime
from typing import List, Optional

from app.core.constants import EventType
from app.schemas.base import CamelModel
from app.schemas.user import PublicDoctorOut


class IndicationCreate(CamelModel):
    slug: Optional[str] = None
    name: Optional[str] = None
    type: str = "link"
    quiz_id: Optional[int] = None
    page_id: Optional[int] = None


class IndicationUpdate(CamelModel):
    name: Optional[str] = None


class IndicationCounts(CamelModel):
    clicks: int
    leads: int


class IndicationOut(CamelModel):
    id: int
    user_id: int
    slug: str
    name: Optional[str] = None
    type: str
    full_link: Optional[str] = None
    quiz_id: Optional[int] = None
    page_id: Optional[int] = None
    created_at: datetime


class IndicationWithCounts(IndicationOut):
    count: IndicationCounts


class DailyCount(CamelModel):
    date: str
    count: int


class RecentLead(CamelModel):
    id: int
    name: str
    phone: str
    status: str
    created_at: datetime


class IndicationDetail(IndicationWithCounts):
    click_stats: List[DailyCount]
    recent_leads: List[RecentLead]


class GenerateLinkIn(CamelModel):
    indication_id: Optional[int] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None


class UtmParams(CamelModel):
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None


class GenerateLinkOut(CamelModel):
    success: bool
    indication: IndicationOut
    link: str
    utm_params: UtmParams


class IndicationStat(CamelModel):
    id: int
    slug: str
    name: Optional[str] = None
    clicks: int
    leads: int
    conversion_rate: int


class OverallStats(CamelModel):
    total_indications: int
    total_clicks: int
    total_leads: int
    overall_conversion_rate: int
    period: str


class DailyStats(CamelModel):
    clicks: List[DailyCount]
    leads: List[DailyCount]


class IndicationStatsOut(CamelModel):
    overall: OverallStats
    indications: List[IndicationStat]
    daily_stats: DailyStats


class PublicIndicationOut(IndicationOut):
    user: PublicDoctorOut


class TrackIn(CamelModel):
    type: EventType = EventType.CLICK
    user_slug: Optional[str] = None
    indication_slug: Optional[str] = None
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
