"""
Application workflow services.

Every function changing an application runs in a single transaction and
takes care of the side effects of the change: the timeline stages, the
audit trail and the notifications.
"""

import logging

from django.db import IntegrityError
from django.db import transaction
from django.utils import timezone
from django_fsm import TransitionNotAllowed

from aicte_portal.activity.models import NotificationType
from aicte_portal.activity.services import notify
from aicte_portal.activity.services import notify_admins
from aicte_portal.activity.services import record_audit
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import APIException
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import InvalidTransitionError
from aicte_portal.core.roles import is_admin
from aicte_portal.core.roles import is_evaluator
from aicte_portal.core.roles import is_institution
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.models import Priority

from . import workflow
from .models import Application
from .models import StageStatus
from .models import TimelineStage
from .models import generate_application_number

logger = logging.getLogger(__name__)

MAX_NUMBER_ATTEMPTS = 5


# ============================================================================
# Access
# ============================================================================


def is_owner(user, application: Application) -> bool:
    return is_institution(user) and application.institution.user_id == user.id


def is_assigned_evaluator(user, application: Application) -> bool:
    return is_evaluator(user) and application.assignments.filter(evaluator=user).exists()


def can_access_application(user, application: Application) -> bool:
    """Owning institution, assigned evaluators and admins see an application."""
    return is_admin(user) or is_owner(user, application) or is_assigned_evaluator(user, application)


def applications_visible_to(user):
    """Applications listed for ``user``: own, assigned, or all for admins."""
    queryset = Application.objects.select_related("institution")
    if is_admin(user):
        return queryset
    if is_institution(user):
        return queryset.filter(institution__user=user)
    if is_evaluator(user):
        return queryset.filter(assignments__evaluator=user).distinct()
    return queryset.none()


# ============================================================================
# Timeline
# ============================================================================


def create_default_timeline(application: Application) -> list[TimelineStage]:
    stages = [
        TimelineStage(
            application=application,
            position=position,
            title=title,
            description=description,
            status=StageStatus.CURRENT if position == 0 else StageStatus.PENDING,
        )
        for position, (title, description) in enumerate(workflow.DEFAULT_TIMELINE)
    ]
    return TimelineStage.objects.bulk_create(stages)


def sync_timeline(application: Application) -> None:
    """
    Align timeline stages with the application status.

    Stages before the current one are completed, later ones pending.
    ``completed_at`` is only set the first time a stage completes.
    """
    current = workflow.current_stage(application.status)
    now = timezone.now()

    for stage in application.timeline_stages.all():
        if current is None or stage.position < current:
            status = StageStatus.COMPLETED
        elif stage.position == current:
            status = StageStatus.CURRENT
        else:
            status = StageStatus.PENDING

        changed = stage.status != status
        stage.status = status
        if status == StageStatus.COMPLETED and stage.completed_at is None:
            stage.completed_at = now
            changed = True

        if changed:
            stage.save(update_fields=["status", "completed_at", "modified"])


# ============================================================================
# Workflow operations
# ============================================================================


def create_application(institution, actor, **fields) -> Application:
    """
    Create a draft application with its default timeline.

    Institution name, address and state default to the institution's own.
    The number is drawn at random and redrawn when already taken.
    """
    fields["institution_name"] = fields.get("institution_name") or institution.name
    fields["address"] = fields.get("address") or institution.address
    fields["state"] = fields.get("state") or institution.state

    for attempt in range(1, MAX_NUMBER_ATTEMPTS + 1):
        number = generate_application_number()
        try:
            with transaction.atomic():
                application = Application.objects.create(
                    number=number,
                    institution=institution,
                    **fields,
                )
                create_default_timeline(application)
                record_audit(actor, "application.create", application, {"number": number})
        except IntegrityError:
            logger.warning("Application number %s already taken (attempt %d)", number, attempt)
            continue

        logger.info("Application %s created for %s", number, institution)
        return application

    raise APIException("Could not allocate an application number")


def _apply_transition(application: Application, method, *args) -> str:
    previous = application.status
    try:
        method(*args)
    except TransitionNotAllowed as e:
        raise InvalidTransitionError(
            str(e) or f"Cannot change status from {previous}",
            details={"current_status": previous},
        ) from e
    return previous


def _notify_owner(application: Application) -> None:
    notify(
        application.institution.user,
        title="Application status updated",
        message=f"Application {application.number} is now {application.get_status_display()}.",
        kind=NotificationType.STATUS_CHANGE,
    )


@transaction.atomic
def submit_application(application: Application, actor) -> Application:
    """File a draft. Only the owning institution may submit."""
    previous = _apply_transition(application, application.submit)
    application.save()
    sync_timeline(application)

    record_audit(actor, "application.submit", application, {"from": previous, "to": application.status})
    _notify_owner(application)
    notify_admins(
        title="New application submitted",
        message=f"{application.institution_name} submitted application {application.number}.",
        kind=NotificationType.SUBMISSION,
    )
    logger.info("Application %s submitted", application.number)
    return application


@transaction.atomic
def change_status(application: Application, target: str, actor) -> Application:
    """Admin moves an application forward or to a final decision."""
    previous = _apply_transition(application, application.advance, target)
    application.save()
    sync_timeline(application)

    record_audit(actor, "application.status_change", application, {"from": previous, "to": application.status})
    _notify_owner(application)
    logger.info("Application %s moved from %s to %s", application.number, previous, application.status)
    return application


@transaction.atomic
def decide(application: Application, decision: str, actor, remarks: str = "") -> Application:
    """Record the final disposition of an application."""
    previous = _apply_transition(application, application.decide, decision)
    application.save()
    sync_timeline(application)

    details = {"from": previous, "to": application.status}
    if remarks:
        details["remarks"] = remarks
    record_audit(actor, "application.decision", application, details)
    _notify_owner(application)
    logger.info("Application %s decided: %s", application.number, application.status)
    return application


@transaction.atomic
def assign_evaluator(
    application: Application,
    evaluator,
    actor,
    priority: str = Priority.MEDIUM,
    deadline=None,
) -> EvaluatorAssignment:
    """
    Assign an evaluator and put the application under evaluation.

    Raises AlreadyExistsError when the evaluator is already assigned.
    """
    if not is_evaluator(evaluator) or not evaluator.is_active:
        raise BadRequestError("User must be an active evaluator")

    if EvaluatorAssignment.objects.filter(application=application, evaluator=evaluator).exists():
        raise AlreadyExistsError("Evaluator already assigned to this application")

    previous = _apply_transition(application, application.start_evaluation)
    application.save()
    sync_timeline(application)

    assignment = EvaluatorAssignment.objects.create(
        application=application,
        evaluator=evaluator,
        priority=priority,
        deadline=deadline,
    )

    profile = getattr(evaluator, "evaluator_profile", None)
    if profile is not None:
        profile.current_workload += 1
        profile.save(update_fields=["current_workload", "modified"])

    record_audit(
        actor,
        "application.assign_evaluator",
        application,
        {"evaluator_id": str(evaluator.id), "priority": priority, "from": previous},
    )
    notify(
        evaluator,
        title="New assignment",
        message=f"Application {application.number} from {application.institution_name} was assigned to you.",
        kind=NotificationType.ASSIGNMENT,
    )
    if previous != application.status:
        _notify_owner(application)

    logger.info("Evaluator %s assigned to %s", evaluator.email, application.number)
    return assignment
