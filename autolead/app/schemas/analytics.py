"""Analytics schemas for lead volume summaries."""

from typing import List

from pydantic import BaseModel


class LeadTotals(BaseModel):
    total_leads: int
    leads_this_week: int
    leads_this_month: int


class StatusCount(BaseModel):
    status: str
    count: int


class AnalyticsOverview(BaseModel):
    totals: LeadTotals
    status_breakdown: List[StatusCount]
