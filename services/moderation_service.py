"""
Admin moderation queue for reported moments.
"""

from typing import Any, Dict, List
import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.helpers import format_base64_image
from repositories import MomentRepository, ReportRepository

logger = logging.getLogger("fitnesshub.moderation")


class ModerationService:

    @staticmethod
    def reported_moments(db: Session) -> List[Dict[str, Any]]:
        reported = []
        for report in ReportRepository(db).list_with_moments():
            moment = report.moment
            author = moment.user if moment else None
            reported.append(
                {
                    "report_id": report.id,
                    "moment_id": report.moment_id,
                    "reason": report.reason,
                    "additional_comment": report.additional_comment,
                    "caption": (moment.caption if moment else None) or "No caption provided",
                    "image": format_base64_image(moment.image_base64 if moment else None),
                    "user_id": moment.user_id if moment else None,
                    "username": (author.username if author else None) or "Unknown User",
                }
            )
        return reported

    @staticmethod
    def dismiss_report(db: Session, report_id: int) -> None:
        repo = ReportRepository(db)
        report = repo.get_by_id(report_id)
        if not report:
            raise NotFoundError(f"Report {report_id} not found")
        repo.delete(report)
        db.commit()
        logger.info(f"report_dismissed report_id={report_id}")

    @staticmethod
    def delete_reported_moment(db: Session, moment_id: int) -> None:
        """Remove the moment together with every report filed against it"""
        moment_repo = MomentRepository(db)
        moment = moment_repo.get_by_id(moment_id)
        if not moment:
            raise NotFoundError(f"Moment {moment_id} not found")
        removed = ReportRepository(db).delete_for_moment(moment_id)
        db.expire(moment, ["reports"])
        moment_repo.delete(moment)
        db.commit()
        logger.info(f"reported_moment_deleted moment_id={moment_id} reports={removed}")
