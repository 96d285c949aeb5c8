from datetime import timedelta

from django.utils import timezone
from factory import LazyFunction
from factory import SubFactory
from factory.django import DjangoModelFactory

from aicte_portal.applications.tests.factories import ApplicationFactory
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.core.roles import Role
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.models import EvaluatorProfile
from aicte_portal.users.tests.factories import UserFactory


class AssignmentFactory(DjangoModelFactory):
    application = SubFactory(ApplicationFactory, status=ApplicationStatus.UNDER_EVALUATION)
    evaluator = SubFactory(UserFactory, role=Role.EVALUATOR)
    deadline = LazyFunction(lambda: timezone.now() + timedelta(days=14))

    class Meta:
        model = EvaluatorAssignment


class EvaluatorProfileFactory(DjangoModelFactory):
    user = SubFactory(UserFactory, role=Role.EVALUATOR)
    expertise = "Computer Science & Engineering"
    department = "Technical Education"

    class Meta:
        model = EvaluatorProfile
