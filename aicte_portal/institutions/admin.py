from django.contrib import admin

from .models import Institution


@admin.register(Institution)
class InstitutionAdmin(admin.ModelAdmin):
    list_display = ["name", "state", "contact_email", "user", "created"]
    list_filter = ["state"]
    search_fields = ["name", "contact_email", "user__email"]
    readonly_fields = ["id", "created", "modified"]
