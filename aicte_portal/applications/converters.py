"""
URL converter for application numbers (``APP-2025-001234``).

Registered on import so API routes can use ``{appnum:number}``.
"""

from django.urls import register_converter


class ApplicationNumberConverter:
    regex = r"APP-\d{4}-\d{6}"

    def to_python(self, value: str) -> str:
        return value

    def to_url(self, value: str) -> str:
        return value


register_converter(ApplicationNumberConverter, "appnum")
