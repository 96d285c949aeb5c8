"""
Seed command to populate database with demo data for frontend development.

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --clear  # Clear existing demo data first
"""

import logging
from datetime import datetime
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from aicte_portal.activity.models import Notification
from aicte_portal.activity.models import NotificationType
from aicte_portal.applications.models import Application
from aicte_portal.applications.models import ApplicationType
from aicte_portal.applications.models import Document
from aicte_portal.applications.models import DocumentStatus
from aicte_portal.applications.services import create_default_timeline
from aicte_portal.applications.services import sync_timeline
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.core.roles import Role
from aicte_portal.evaluations.models import EvaluatorAssignment
from aicte_portal.evaluations.models import EvaluatorProfile
from aicte_portal.evaluations.models import Priority
from aicte_portal.institutions.models import Institution
from aicte_portal.messaging.models import Message
from aicte_portal.users.models import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
DEMO_EMAILS = [
    "admin@aicte.gov.in",
    "evaluator@aicte.gov.in",
    "iit@institution.edu",
]
DEMO_NUMBERS = ["APP-2025-001234", "APP-2025-001189", "APP-2024-009876"]


def aware(year, month, day):
    return timezone.make_aware(datetime(year, month, day))


class Command(BaseCommand):
    help = "Seed database with demo data for frontend development"

    def add_arguments(self, parser):
        parser.add_argument(
            "--clear",
            action="store_true",
            help="Clear existing demo data before seeding",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["clear"]:
            self.clear_demo_data()

        if Application.objects.filter(number__in=DEMO_NUMBERS).exists():
            self.stdout.write(self.style.WARNING("Demo data already present, use --clear to recreate it"))
            return

        self.stdout.write("Creating demo data...")

        admin = self.create_user("admin@aicte.gov.in", "Admin User", Role.ADMIN)
        evaluator = self.create_user("evaluator@aicte.gov.in", "Dr. Rajesh Kumar", Role.EVALUATOR)
        owner = self.create_user("iit@institution.edu", "IIT Mumbai", Role.INSTITUTION)

        institution, _ = Institution.objects.get_or_create(
            user=owner,
            defaults={
                "name": "Indian Institute of Technology, Mumbai",
                "address": "Powai, Mumbai",
                "state": "Maharashtra",
                "contact_email": owner.email,
                "contact_phone": "+91 22 2576 8000",
            },
        )
        self.stdout.write(f"  Created institution: {institution.name}")

        applications_data = [
            {
                "number": "APP-2025-001234",
                "application_type": ApplicationType.NEW_INSTITUTION,
                "status": ApplicationStatus.UNDER_EVALUATION,
                "course_name": "B.Tech in Computer Science",
                "intake": 120,
                "description": "New B.Tech program in Computer Science",
                "submitted_at": aware(2025, 1, 15),
            },
            {
                "number": "APP-2025-001189",
                "application_type": ApplicationType.INTAKE_INCREASE,
                "status": ApplicationStatus.DOCUMENT_VERIFICATION,
                "course_name": "M.Tech in Data Science",
                "intake": 60,
                "description": "Increase intake for M.Tech program",
                "submitted_at": aware(2025, 1, 10),
            },
            {
                "number": "APP-2024-009876",
                "application_type": ApplicationType.EOA,
                "status": ApplicationStatus.APPROVED,
                "course_name": "B.Tech in Electronics",
                "intake": 100,
                "description": "Extension of Approval",
                "submitted_at": aware(2024, 12, 20),
            },
        ]
        applications = []
        for data in applications_data:
            application = Application.objects.create(
                institution=institution,
                institution_name=institution.name,
                address=institution.address,
                state=institution.state,
                **data,
            )
            create_default_timeline(application)
            sync_timeline(application)
            applications.append(application)
            self.stdout.write(f"  Created application: {application.number} ({application.status})")

        under_evaluation = applications[0]
        EvaluatorAssignment.objects.create(
            application=under_evaluation,
            evaluator=evaluator,
            priority=Priority.HIGH,
            deadline=timezone.now() + timedelta(days=5),
        )
        under_evaluation.timeline_stages.filter(position=3).update(assigned_to=evaluator.name)

        EvaluatorProfile.objects.get_or_create(
            user=evaluator,
            defaults={
                "expertise": "Computer Science & Engineering",
                "department": "Technical Education",
                "current_workload": 1,
            },
        )
        self.stdout.write(f"  Assigned {evaluator.name} to {under_evaluation.number}")

        Document.objects.bulk_create([
            Document(
                application=under_evaluation,
                category="Academic Records",
                file_name="affiliation_certificate.pdf",
                file_size="2.3 MB",
                file_url="https://files.example.org/demo/affiliation_certificate.pdf",
                status=DocumentStatus.APPROVED,
                verified=True,
            ),
            Document(
                application=under_evaluation,
                category="Infrastructure",
                file_name="building_plan.pdf",
                file_size="5.1 MB",
                file_url="https://files.example.org/demo/building_plan.pdf",
            ),
            Document(
                application=applications[1],
                category="Faculty",
                file_name="faculty_list.xlsx",
                file_size="340 KB",
                file_url="https://files.example.org/demo/faculty_list.xlsx",
            ),
        ])

        Message.objects.bulk_create([
            Message(
                application=under_evaluation,
                sender=evaluator,
                content="Please share the updated fire safety certificate before the site visit.",
            ),
            Message(
                application=under_evaluation,
                sender=owner,
                content="The certificate will be uploaded by the end of this week.",
            ),
        ])

        Notification.objects.bulk_create([
            Notification(
                user=owner,
                type=NotificationType.STATUS_CHANGE,
                title="Application status updated",
                message=f"Application {under_evaluation.number} is now Under evaluation.",
            ),
            Notification(
                user=evaluator,
                type=NotificationType.ASSIGNMENT,
                title="New assignment",
                message=f"Application {under_evaluation.number} from {institution.name} was assigned to you.",
            ),
        ])

        self.stdout.write(self.style.SUCCESS("\nDemo data created successfully!"))
        self.stdout.write("\nSummary:")
        self.stdout.write(f"  - Admin: {admin.email}")
        self.stdout.write(f"  - Evaluator: {evaluator.email}")
        self.stdout.write(f"  - Institution: {owner.email}")
        self.stdout.write(f"  - {len(applications)} applications")
        self.stdout.write(f"\nDefault password for all users: {DEMO_PASSWORD}")

    def create_user(self, email, name, role):
        """Create a user if not exists."""
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "name": name,
                "role": role,
                "is_staff": role == Role.ADMIN,
            },
        )
        if created:
            user.set_password(DEMO_PASSWORD)
            user.save()
            self.stdout.write(f"  Created user: {email} ({role.value})")
        return user

    def clear_demo_data(self):
        """Clear existing demo data."""
        self.stdout.write("Clearing existing demo data...")

        # Applications first: they protect the institution, which protects its user
        Message.objects.filter(application__number__in=DEMO_NUMBERS).delete()
        EvaluatorAssignment.objects.filter(application__number__in=DEMO_NUMBERS).delete()
        Application.objects.filter(number__in=DEMO_NUMBERS).delete()
        Institution.objects.filter(user__email__in=DEMO_EMAILS).delete()
        User.objects.filter(email__in=DEMO_EMAILS).delete()

        self.stdout.write(self.style.WARNING("  Demo data cleared"))
