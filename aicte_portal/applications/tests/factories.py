from django.utils import timezone
from factory import LazyAttribute
from factory import SelfAttribute
from factory import Sequence
from factory import SubFactory
from factory import post_generation
from factory.django import DjangoModelFactory

from aicte_portal.applications.models import Application
from aicte_portal.applications.models import ApplicationType
from aicte_portal.applications.models import Document
from aicte_portal.applications.models import InfrastructureImage
from aicte_portal.applications.services import create_default_timeline
from aicte_portal.applications.services import sync_timeline
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.institutions.tests.factories import InstitutionFactory


class ApplicationFactory(DjangoModelFactory):
    """Application with its timeline aligned on ``status``."""

    number = Sequence(lambda n: f"APP-2025-{n:06d}")
    institution = SubFactory(InstitutionFactory)
    application_type = ApplicationType.NEW_COURSE
    status = ApplicationStatus.DRAFT
    institution_name = SelfAttribute("institution.name")
    address = SelfAttribute("institution.address")
    state = SelfAttribute("institution.state")
    course_name = "B.Tech in Computer Science"
    intake = 60
    submitted_at = LazyAttribute(
        lambda o: None if o.status == ApplicationStatus.DRAFT else timezone.now(),
    )

    class Meta:
        model = Application
        skip_postgeneration_save = True

    @post_generation
    def timeline(self, create, extracted, **kwargs):
        if create:
            create_default_timeline(self)
            sync_timeline(self)


class DocumentFactory(DjangoModelFactory):
    application = SubFactory(ApplicationFactory)
    category = "Academic Records"
    file_name = Sequence(lambda n: f"document_{n}.pdf")
    file_size = "1.2 MB"
    file_url = LazyAttribute(lambda o: f"https://files.example.org/{o.file_name}")

    class Meta:
        model = Document


class InfrastructureImageFactory(DjangoModelFactory):
    application = SubFactory(ApplicationFactory, status=ApplicationStatus.SUBMITTED)
    image_url = Sequence(lambda n: f"https://files.example.org/images/facility_{n}.jpg")
    facility_type = "laboratory"
    geo_coordinates = {"lat": 19.1334, "lng": 72.9133}

    class Meta:
        model = InfrastructureImage
