from fastapi import APIRouter
from fastapi.responses import StreamingResponse
from models import Report
from report import build_report, export_csv, export_filename, export_xlsx
from storage import load_state
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/report", response_model=Report)
def get_report():
    report = build_report(load_state())
    logger.info("GET /report — %d rows", len(report.rows))
    return report


@router.get("/export/report/csv")
def export_report_csv():
    filename = export_filename("csv")
    logger.info("GET /export/report/csv — exporting %s", filename)
    return StreamingResponse(
        iter([export_csv(load_state())]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/export/report/xlsx")
def export_report_xlsx():
    filename = export_filename("xlsx")
    logger.info("GET /export/report/xlsx — exporting %s", filename)
    return StreamingResponse(
        iter([export_xlsx(load_state())]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
