"""Lead volume and status counts for the analytics endpoint."""

from datetime import datetime, timedelta

from sqlalchemy import case, func

from autolead.app.models.lead import Lead


def get_lead_analytics(db, *, criteria: list, now: datetime) -> dict:
    week_start = now - timedelta(days=7)
    month_start = now - timedelta(days=30)

    total, this_week, this_month = (
        db.query(
            func.count(Lead.id),
            func.count(case((Lead.created_at >= week_start, 1))),
            func.count(case((Lead.created_at >= month_start, 1))),
        )
        .filter(*criteria)
        .one()
    )

    status_rows = (
        db.query(Lead.status, func.count(Lead.id))
        .filter(*criteria)
        .group_by(Lead.status)
        .order_by(Lead.status.asc())
        .all()
    )

    return {
        "totals": {
            "total_leads": total,
            "leads_this_week": this_week,
            "leads_this_month": this_month,
        },
        "status_breakdown": [{"status": status, "count": count} for status, count in status_rows],
    }
