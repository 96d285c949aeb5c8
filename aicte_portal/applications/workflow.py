"""
Application status workflow.

The whole state machine is expressed as plain lookups:

    draft -> submitted                       (owning institution)
    submitted/scrutiny/document_verification
        -> under_evaluation                  (admin assigns an evaluator)
    active status -> any later active status (admin, forward only)
    active status -> approved/rejected/conditional_approval
                                             (admin or assigned evaluator)

"Active" means neither draft nor terminal. Terminal statuses have no exits.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class ApplicationStatus(models.TextChoices):
    DRAFT = "draft", _("Draft")
    SUBMITTED = "submitted", _("Submitted")
    SCRUTINY = "scrutiny", _("Scrutiny")
    DOCUMENT_VERIFICATION = "document_verification", _("Document verification")
    UNDER_EVALUATION = "under_evaluation", _("Under evaluation")
    SITE_VISIT_SCHEDULED = "site_visit_scheduled", _("Site visit scheduled")
    SITE_VISIT_COMPLETED = "site_visit_completed", _("Site visit completed")
    FINAL_REVIEW = "final_review", _("Final review")
    APPROVED = "approved", _("Approved")
    REJECTED = "rejected", _("Rejected")
    CONDITIONAL_APPROVAL = "conditional_approval", _("Conditional approval")


# Non-terminal statuses, in workflow order
PROGRESSION = [
    ApplicationStatus.DRAFT,
    ApplicationStatus.SUBMITTED,
    ApplicationStatus.SCRUTINY,
    ApplicationStatus.DOCUMENT_VERIFICATION,
    ApplicationStatus.UNDER_EVALUATION,
    ApplicationStatus.SITE_VISIT_SCHEDULED,
    ApplicationStatus.SITE_VISIT_COMPLETED,
    ApplicationStatus.FINAL_REVIEW,
]

TERMINAL_STATUSES = [
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
    ApplicationStatus.CONDITIONAL_APPROVAL,
]

ACTIVE_STATUSES = PROGRESSION[1:]

# Statuses from which assigning an evaluator is allowed
ASSIGNABLE_STATUSES = [
    ApplicationStatus.SUBMITTED,
    ApplicationStatus.SCRUTINY,
    ApplicationStatus.DOCUMENT_VERIFICATION,
    ApplicationStatus.UNDER_EVALUATION,
]

# Submission belongs to the institution, so admins never target it
ADMIN_TARGETS = PROGRESSION[2:] + TERMINAL_STATUSES

# Statuses counted as "in progress" on the institution dashboard
IN_PROGRESS_STATUSES = [
    ApplicationStatus.SUBMITTED,
    ApplicationStatus.SCRUTINY,
    ApplicationStatus.DOCUMENT_VERIFICATION,
    ApplicationStatus.UNDER_EVALUATION,
]


DEFAULT_TIMELINE = [
    ("Application Submitted", "Application created"),
    ("Initial Scrutiny", "Awaiting scrutiny"),
    ("Document Verification", "Awaiting verification"),
    ("Evaluator Assignment", "Awaiting evaluator"),
    ("Site Visit & Evaluation", "Pending site visit"),
    ("Final Approval", "Pending final review"),
]

# Position of the "current" timeline stage for each non-terminal status
CURRENT_STAGE = {
    ApplicationStatus.DRAFT: 0,
    ApplicationStatus.SUBMITTED: 1,
    ApplicationStatus.SCRUTINY: 1,
    ApplicationStatus.DOCUMENT_VERIFICATION: 2,
    ApplicationStatus.UNDER_EVALUATION: 4,
    ApplicationStatus.SITE_VISIT_SCHEDULED: 4,
    ApplicationStatus.SITE_VISIT_COMPLETED: 4,
    ApplicationStatus.FINAL_REVIEW: 5,
}


def is_terminal(status: str) -> bool:
    return status in TERMINAL_STATUSES


def is_active(status: str) -> bool:
    return status in ACTIVE_STATUSES


def admin_targets(status: str) -> list[ApplicationStatus]:
    """
    Statuses an admin may move an application to from ``status``.

    Empty for drafts and terminal applications.
    """
    if not is_active(status):
        return []
    later = PROGRESSION[PROGRESSION.index(status) + 1 :]
    return [s for s in later if s in ADMIN_TARGETS] + TERMINAL_STATUSES


def can_advance(status: str, target: str) -> bool:
    return target in admin_targets(status)


def can_decide(status: str, decision: str) -> bool:
    return is_active(status) and decision in TERMINAL_STATUSES


def current_stage(status: str) -> int | None:
    """
    Position of the current timeline stage, or None once every stage is done.
    """
    if is_terminal(status):
        return None
    return CURRENT_STAGE[ApplicationStatus(status)]
