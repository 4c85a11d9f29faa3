"""Report endpoints: read, confirm, delete."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.schemas.report import ReportConfirm, ReportConfirmed, ReportRead
from app.services.reports import ReportAlreadyConfirmed, confirm_report, get_report

router = APIRouter()


@router.get("/{report_id}", response_model=ReportRead)
async def read_report(report_id: int, db: AsyncSession = Depends(get_db)):
    report = await get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    return report


@router.post("/{report_id}/confirm", response_model=ReportConfirmed)
async def confirm(report_id: int, payload: ReportConfirm, db: AsyncSession = Depends(get_db)):
    """
    Accept the corrected measurement for a pending report.
    The first confirmed report opens the user's competition window.
    Returns the report plus any badges earned by it.
    """
    report = await get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    try:
        new_badges = await confirm_report(db, report, payload)
    except ReportAlreadyConfirmed as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    return ReportConfirmed(report=ReportRead.model_validate(report), new_badges=new_badges)


@router.delete("/{report_id}", status_code=204)
async def delete_report(report_id: int, db: AsyncSession = Depends(get_db)):
    """Delete a report and its measurement. Earned badges are kept."""
    report = await get_report(db, report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    await db.delete(report)
    return None
