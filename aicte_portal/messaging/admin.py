from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["id", "application", "sender", "content_preview", "created"]
    list_filter = ["created"]
    search_fields = ["content", "sender__email", "application__number"]
    readonly_fields = ["id", "created", "modified"]

    @admin.display(description="Content")
    def content_preview(self, obj):
        return obj.content[:50] + "..." if len(obj.content) > 50 else obj.content
