"""Catalog lookup errors."""

from __future__ import annotations


class ResourceNotFound(LookupError):
    """Raised when a (resource_type, resource_id) pair is not in the catalog."""

    def __init__(self, resource_type: str, resource_id) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{str(resource_type).capitalize()} {resource_id} not found")
