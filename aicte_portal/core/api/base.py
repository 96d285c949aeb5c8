"""
Base API class for auto-discovery of controllers.

All API controllers should inherit from BaseAPI to be automatically
registered with the NinjaExtraAPI instance.
"""


class BaseAPI:
    """
    Marker class for API controllers.

    Controllers inheriting from this class will be automatically
    discovered and registered by the API configuration.

    Example:
        @api_controller("/applications", tags=["Applications"])
        class ApplicationsController(BaseAPI):
            @http_get("/")
            def list_applications(self):
                ...
    """

    pass
