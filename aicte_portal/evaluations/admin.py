from django.contrib import admin

from .models import Evaluation
from .models import EvaluatorAssignment
from .models import EvaluatorProfile


@admin.register(EvaluatorAssignment)
class EvaluatorAssignmentAdmin(admin.ModelAdmin):
    list_display = ["application", "evaluator", "priority", "deadline", "assigned_at", "completed_at"]
    list_filter = ["priority", "assigned_at"]
    search_fields = ["application__number", "evaluator__email"]
    readonly_fields = ["id", "created", "modified"]


@admin.register(Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display = ["application", "evaluator", "score", "created"]
    search_fields = ["application__number", "evaluator__email", "recommendation"]
    readonly_fields = ["id", "created", "modified"]


@admin.register(EvaluatorProfile)
class EvaluatorProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "expertise", "department", "available", "current_workload"]
    list_filter = ["available", "department"]
    search_fields = ["user__email", "user__name", "expertise"]
    readonly_fields = ["id", "created", "modified"]
