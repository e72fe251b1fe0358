# testimonialhub/services/stats.py
"""Project stats are always re-derived from the testimonials table.

Counters are never adjusted on moderation or deletion; a full GROUP BY
recount replaces them. Concurrent moderators race on the final write and
the last one wins.
"""
import logging

from sqlalchemy import func

from ..extensions import db
from ..models.project import Project
from ..models.testimonial import Testimonial

log = logging.getLogger(__name__)


def count_by_status(project_id: int) -> dict[str, int]:
    rows = (
        db.session.query(Testimonial.status, func.count(Testimonial.id))
        .filter(Testimonial.project_id == project_id)
        .group_by(Testimonial.status)
        .all()
    )
    return {status: int(count) for status, count in rows}


def recompute_project_stats(project: Project, commit: bool = True) -> dict:
    counts = count_by_status(project.id)
    project.total_submissions = sum(counts.values())
    project.approved_count = counts.get("approved", 0)
    project.rejected_count = counts.get("rejected", 0)
    if commit:
        db.session.commit()
    log.debug("stats recomputed for project %s: %s", project.id, project.stats)
    return project.stats


def record_submission(project: Project, status: str) -> None:
    """Atomic increment for a fresh public submission (no recount)."""
    values = {Project.total_submissions: Project.total_submissions + 1}
    if status == "approved":
        values[Project.approved_count] = Project.approved_count + 1
    Project.query.filter(Project.id == project.id).update(values, synchronize_session=False)
