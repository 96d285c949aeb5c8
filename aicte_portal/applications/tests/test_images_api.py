"""
Tests for infrastructure images and their CV analysis.
"""

import pytest

from aicte_portal.activity.models import AuditLog
from aicte_portal.applications.models import CVAnalysis
from aicte_portal.applications.models import InfrastructureImage
from aicte_portal.applications.tests.factories import ApplicationFactory
from aicte_portal.applications.tests.factories import InfrastructureImageFactory
from aicte_portal.applications.workflow import ApplicationStatus
from aicte_portal.evaluations.tests.factories import AssignmentFactory

IMAGE = {
    "image_url": "https://files.example.org/images/library.jpg",
    "facility_type": "library",
    "geo_coordinates": {"lat": 19.1334, "lng": 72.9133},
}

ANALYSIS = {
    "dimensions": {"length_m": 30, "width_m": 18},
    "detected_features": ["bookshelves", "reading tables"],
    "meets_standards": True,
    "accuracy_score": 92,
    "remarks": "Reading room matches the declared area.",
}


def send(client, method, url, data=None):
    return getattr(client, method)(
        url,
        data=data or {},
        content_type="application/json",
        HTTP_X_CSRFTOKEN=client.csrf_token,
    )


def images_url(application):
    return f"/api/applications/{application.number}/infrastructure-images"


def analysis_url(image):
    return f"/api/infrastructure-images/{image.id}/cv-analysis"


@pytest.mark.django_db
class TestUploadImage:
    def test_owner_uploads(self, institution_client, institution):
        application = ApplicationFactory(institution=institution, status=ApplicationStatus.SUBMITTED)

        response = send(institution_client, "post", images_url(application), IMAGE)

        assert response.status_code == 201
        data = response.json()["image"]
        assert data["facility_type"] == "library"
        assert data["geo_coordinates"] == {"lat": 19.1334, "lng": 72.9133}
        assert AuditLog.objects.filter(action="infrastructure_image.upload").exists()

    def test_facility_type_is_required(self, institution_client, institution):
        application = ApplicationFactory(institution=institution)

        response = send(institution_client, "post", images_url(application), {**IMAGE, "facility_type": "  "})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_other_institution_is_refused(self, institution_client, institution):
        application = ApplicationFactory()

        response = send(institution_client, "post", images_url(application), IMAGE)

        assert response.status_code == 403
        assert response.json()["code"] == "NOT_OWNER"

    def test_decided_application_is_locked(self, institution_client, institution):
        application = ApplicationFactory(institution=institution, status=ApplicationStatus.APPROVED)

        response = send(institution_client, "post", images_url(application), IMAGE)

        assert response.status_code == 400
        assert response.json()["code"] == "APPLICATION_LOCKED"

    def test_admin_cannot_upload(self, admin_client):
        application = ApplicationFactory()

        response = send(admin_client, "post", images_url(application), IMAGE)

        assert response.status_code == 403


@pytest.mark.django_db
class TestListImages:
    def test_assigned_evaluator_lists_images(self, evaluator_client, evaluator_user):
        assignment = AssignmentFactory(evaluator=evaluator_user)
        InfrastructureImageFactory(application=assignment.application)
        InfrastructureImageFactory(application=assignment.application)

        response = evaluator_client.get(images_url(assignment.application))

        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_unassigned_evaluator_is_refused(self, evaluator_client):
        image = InfrastructureImageFactory()

        response = evaluator_client.get(images_url(image.application))

        assert response.status_code == 403


@pytest.mark.django_db
class TestDeleteImage:
    def test_owner_deletes_image_and_analysis(self, institution_client, institution):
        image = InfrastructureImageFactory(application=ApplicationFactory(institution=institution))
        CVAnalysis.objects.create(image=image, accuracy_score=80)

        response = send(institution_client, "delete", f"/api/infrastructure-images/{image.id}")

        assert response.status_code == 200
        assert not InfrastructureImage.objects.filter(id=image.id).exists()
        assert not CVAnalysis.objects.exists()

    def test_other_institution_is_refused(self, institution_client, institution):
        image = InfrastructureImageFactory()

        response = send(institution_client, "delete", f"/api/infrastructure-images/{image.id}")

        assert response.status_code == 403
        assert InfrastructureImage.objects.filter(id=image.id).exists()


@pytest.mark.django_db
class TestCVAnalysis:
    def test_admin_records_analysis(self, admin_client):
        image = InfrastructureImageFactory()

        response = send(admin_client, "post", analysis_url(image), ANALYSIS)

        assert response.status_code == 201
        data = response.json()["analysis"]
        assert data["image_id"] == str(image.id)
        assert data["meets_standards"] is True
        assert data["detected_features"] == ["bookshelves", "reading tables"]

    def test_one_analysis_per_image(self, admin_client):
        image = InfrastructureImageFactory()
        CVAnalysis.objects.create(image=image)

        response = send(admin_client, "post", analysis_url(image), ANALYSIS)

        assert response.status_code == 409

    def test_score_out_of_range(self, admin_client):
        image = InfrastructureImageFactory()

        response = send(admin_client, "post", analysis_url(image), {**ANALYSIS, "accuracy_score": 140})

        assert response.status_code == 400

    def test_institution_cannot_record(self, institution_client, institution):
        image = InfrastructureImageFactory(application=ApplicationFactory(institution=institution))

        response = send(institution_client, "post", analysis_url(image), ANALYSIS)

        assert response.status_code == 403

    def test_owner_reads_analysis(self, institution_client, institution):
        image = InfrastructureImageFactory(application=ApplicationFactory(institution=institution))
        CVAnalysis.objects.create(image=image, meets_standards=False, remarks="Lab smaller than declared.")

        response = institution_client.get(analysis_url(image))

        assert response.status_code == 200
        assert response.json()["analysis"]["remarks"] == "Lab smaller than declared."

    def test_missing_analysis(self, admin_client):
        image = InfrastructureImageFactory()

        response = admin_client.get(analysis_url(image))

        assert response.status_code == 404
