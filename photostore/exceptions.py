"""Exceptions raised by the photostore persistence layer."""


class PhotostoreError(Exception):
    """Base exception for all photostore errors."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(PhotostoreError):
    """Raised when a record does not exist within the caller's ownership."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with identifier '{identifier}' not found", status_code=404)


class AssetNotFoundError(NotFoundError):
    """Raised by batch tag operations when an asset id does not resolve for the owner."""

    def __init__(self, asset_id):
        self.asset_id = asset_id
        super().__init__("asset", str(asset_id))


class DuplicateNameError(PhotostoreError):
    """Raised when a name is already taken for the same owner."""

    def __init__(self, resource: str, name: str):
        self.resource = resource
        self.name = name
        super().__init__(f"{resource} with name '{name}' already exists", status_code=409)


class InvalidCriterionValueError(PhotostoreError, ValueError):
    """Raised when a rule value does not have the shape its key requires."""

    def __init__(self, key, expected_type, detail: str | None = None):
        self.key = key
        self.expected_type = expected_type
        self.detail = detail
        key_name = getattr(key, "value", key)
        type_name = getattr(expected_type, "value", expected_type)
        message = f"Invalid value for rule '{key_name}': expected {type_name}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message, status_code=400)
