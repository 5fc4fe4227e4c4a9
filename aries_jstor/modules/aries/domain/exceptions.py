"""Aries lookup domain exceptions."""

from aries_jstor.core.domain.exceptions import DomainException, EntityNotFoundError


class AssetNotFoundError(EntityNotFoundError):
    """Raised when no filter produced exactly one catalog hit."""

    def __init__(self, external_id: str):
        self.external_id = external_id
        DomainException.__init__(self, f"{external_id} not found")


class AmbiguousMatchError(DomainException):
    """Raised internally when a filter matched more than one asset."""

    error_code = "AMBIGUOUS_MATCH"

    def __init__(self, filter_label: str, total: int):
        self.filter_label = filter_label
        self.total = total
        super().__init__(f"Query filter {filter_label} returned {total} hits")
