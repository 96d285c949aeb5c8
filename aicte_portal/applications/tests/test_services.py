"""
Tests for the application workflow services.
"""

import pytest

from aicte_portal.activity.models import AuditLog
from aicte_portal.activity.models import Notification
from aicte_portal.activity.models import NotificationType
from aicte_portal.applications import services
from aicte_portal.applications.models import Application
from aicte_portal.applications.models import ApplicationType
from aicte_portal.applications.models import StageStatus
from aicte_portal.applications.tests.factories import ApplicationFactory
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.core.exceptions import AlreadyExistsError
from aicte_portal.core.exceptions import APIException
from aicte_portal.core.exceptions import BadRequestError
from aicte_portal.core.exceptions import InvalidTransitionError
from aicte_portal.evaluations.tests.factories import EvaluatorProfileFactory


def stage_statuses(application):
    return list(application.timeline_stages.order_by("position").values_list("status", flat=True))


@pytest.mark.django_db
class TestCreateApplication:
    def test_creates_draft_with_timeline(self, institution, institution_user):
        application = services.create_application(
            institution,
            institution_user,
            application_type=ApplicationType.NEW_COURSE,
            course_name="MBA",
        )

        assert application.status == ApplicationStatus.DRAFT
        assert application.number.startswith("APP-")
        assert application.institution_name == institution.name
        assert application.state == institution.state
        assert stage_statuses(application) == ["current"] + ["pending"] * 5
        assert AuditLog.objects.filter(action="application.create", entity_id=str(application.id)).exists()

    def test_given_name_overrides_institution_name(self, institution, institution_user):
        application = services.create_application(
            institution,
            institution_user,
            application_type=ApplicationType.NEW_INSTITUTION,
            institution_name="IIT Mumbai, Navi Mumbai campus",
        )

        assert application.institution_name == "IIT Mumbai, Navi Mumbai campus"

    def test_number_collision_draws_again(self, institution, institution_user, monkeypatch):
        existing = ApplicationFactory(number="APP-2025-000001")
        numbers = iter([existing.number, "APP-2025-000002"])
        monkeypatch.setattr(services, "generate_application_number", lambda: next(numbers))

        application = services.create_application(
            institution,
            institution_user,
            application_type=ApplicationType.EOA,
        )

        assert application.number == "APP-2025-000002"
        assert Application.objects.filter(number="APP-2025-000001").count() == 1

    def test_gives_up_after_repeated_collisions(self, institution, institution_user, monkeypatch):
        existing = ApplicationFactory(number="APP-2025-000001")
        monkeypatch.setattr(services, "generate_application_number", lambda: existing.number)

        with pytest.raises(APIException):
            services.create_application(
                institution,
                institution_user,
                application_type=ApplicationType.EOA,
            )


@pytest.mark.django_db
class TestSubmit:
    def test_submit_draft(self, institution, institution_user, admin_user):
        application = ApplicationFactory(institution=institution)

        services.submit_application(application, institution_user)

        application.refresh_from_db()
        assert application.status == ApplicationStatus.SUBMITTED
        assert application.submitted_at is not None
        assert stage_statuses(application) == ["completed", "current"] + ["pending"] * 4
        assert Notification.objects.filter(user=institution_user, type=NotificationType.STATUS_CHANGE).exists()
        assert Notification.objects.filter(user=admin_user, type=NotificationType.SUBMISSION).exists()

    def test_submit_twice_is_refused(self, institution, institution_user):
        application = ApplicationFactory(institution=institution, status=ApplicationStatus.SUBMITTED)

        with pytest.raises(InvalidTransitionError) as exc_info:
            services.submit_application(application, institution_user)

        assert exc_info.value.details == {"current_status": "submitted"}


@pytest.mark.django_db
class TestChangeStatus:
    def test_forward_move(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.SUBMITTED)

        services.change_status(application, ApplicationStatus.DOCUMENT_VERIFICATION, admin_user)

        application.refresh_from_db()
        assert application.status == ApplicationStatus.DOCUMENT_VERIFICATION
        assert stage_statuses(application) == ["completed", "completed", "current", "pending", "pending", "pending"]
        log = AuditLog.objects.get(action="application.status_change")
        assert log.details == {"from": "submitted", "to": "document_verification"}

    def test_backward_move_is_refused(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.UNDER_EVALUATION)

        with pytest.raises(InvalidTransitionError):
            services.change_status(application, ApplicationStatus.SCRUTINY, admin_user)

        application.refresh_from_db()
        assert application.status == ApplicationStatus.UNDER_EVALUATION

    def test_draft_cannot_be_moved(self, admin_user):
        application = ApplicationFactory()

        with pytest.raises(InvalidTransitionError):
            services.change_status(application, ApplicationStatus.SCRUTINY, admin_user)

    def test_terminal_status_completes_timeline(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.FINAL_REVIEW)

        services.change_status(application, ApplicationStatus.APPROVED, admin_user)

        assert stage_statuses(application) == ["completed"] * 6
        assert not application.timeline_stages.filter(completed_at__isnull=True).exists()


@pytest.mark.django_db
class TestTimelineSync:
    def test_completed_at_is_kept(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.SUBMITTED)
        first = application.timeline_stages.get(position=0)
        completed_at = first.completed_at
        assert completed_at is not None

        services.change_status(application, ApplicationStatus.FINAL_REVIEW, admin_user)

        first.refresh_from_db()
        assert first.completed_at == completed_at

    def test_single_current_stage(self):
        application = ApplicationFactory(status=ApplicationStatus.SITE_VISIT_SCHEDULED)

        assert application.timeline_stages.filter(status=StageStatus.CURRENT).count() == 1
        assert application.timeline_stages.get(status=StageStatus.CURRENT).position == 4


@pytest.mark.django_db
class TestDecide:
    def test_records_decision_with_remarks(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.UNDER_EVALUATION)

        services.decide(application, ApplicationStatus.CONDITIONAL_APPROVAL, admin_user, remarks="Add faculty")

        application.refresh_from_db()
        assert application.status == ApplicationStatus.CONDITIONAL_APPROVAL
        log = AuditLog.objects.get(action="application.decision")
        assert log.details["remarks"] == "Add faculty"

    def test_non_terminal_decision_is_refused(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.UNDER_EVALUATION)

        with pytest.raises(InvalidTransitionError):
            services.decide(application, ApplicationStatus.FINAL_REVIEW, admin_user)

    def test_decided_application_is_final(self, admin_user):
        application = ApplicationFactory(status=ApplicationStatus.REJECTED)

        with pytest.raises(InvalidTransitionError):
            services.decide(application, ApplicationStatus.APPROVED, admin_user)


@pytest.mark.django_db
class TestAssignEvaluator:
    def test_assignment_starts_evaluation(self, admin_user, evaluator_user):
        application = ApplicationFactory(status=ApplicationStatus.DOCUMENT_VERIFICATION)

        assignment = services.assign_evaluator(application, evaluator_user, admin_user)

        application.refresh_from_db()
        assert application.status == ApplicationStatus.UNDER_EVALUATION
        assert assignment.evaluator == evaluator_user
        assert assignment.priority == "medium"
        assert Notification.objects.filter(user=evaluator_user, type=NotificationType.ASSIGNMENT).exists()
        assert Notification.objects.filter(
            user=application.institution.user,
            type=NotificationType.STATUS_CHANGE,
        ).exists()

    def test_second_evaluator_keeps_status(self, admin_user, evaluator_user):
        application = ApplicationFactory(status=ApplicationStatus.UNDER_EVALUATION)
        other = EvaluatorProfileFactory().user

        services.assign_evaluator(application, evaluator_user, admin_user)
        services.assign_evaluator(application, other, admin_user)

        assert application.assignments.count() == 2
        assert not Notification.objects.filter(user=application.institution.user).exists()

    def test_duplicate_assignment(self, admin_user, evaluator_user):
        application = ApplicationFactory(status=ApplicationStatus.SUBMITTED)
        services.assign_evaluator(application, evaluator_user, admin_user)

        with pytest.raises(AlreadyExistsError):
            services.assign_evaluator(application, evaluator_user, admin_user)

    def test_non_evaluator_is_refused(self, admin_user, institution_user):
        application = ApplicationFactory(status=ApplicationStatus.SUBMITTED)

        with pytest.raises(BadRequestError):
            services.assign_evaluator(application, institution_user, admin_user)

    def test_draft_cannot_be_assigned(self, admin_user, evaluator_user):
        application = ApplicationFactory()

        with pytest.raises(InvalidTransitionError):
            services.assign_evaluator(application, evaluator_user, admin_user)

    def test_workload_is_incremented(self, admin_user):
        profile = EvaluatorProfileFactory()
        application = ApplicationFactory(status=ApplicationStatus.SCRUTINY)

        services.assign_evaluator(application, profile.user, admin_user)

        profile.refresh_from_db()
        assert profile.current_workload == 1


@pytest.mark.django_db
class TestVisibility:
    def test_roles_see_their_applications(self, admin_user, evaluator_user, institution):
        own = ApplicationFactory(institution=institution, status=ApplicationStatus.SUBMITTED)
        other = ApplicationFactory(status=ApplicationStatus.SUBMITTED)
        services.assign_evaluator(other, evaluator_user, admin_user)

        assert list(services.applications_visible_to(institution.user)) == [own]
        assert list(services.applications_visible_to(evaluator_user)) == [other]
        assert set(services.applications_visible_to(admin_user)) == {own, other}
