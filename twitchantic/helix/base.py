from collections.abc import Callable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..cache import DerivedValueCache
from ..exceptions import MappingError
from ..pagination import PaginatedResult, Paginator, ResultMapper, create_paginated_result
from ..request import RequestDescriptor
from ..response import Row

if TYPE_CHECKING:
    from ..api_client import ApiClient

D = TypeVar("D", bound=BaseModel)
E = TypeVar("E", bound="HelixEntity[Any]")


def _export(value: Any) -> Any:
    if isinstance(value, HelixEntity):
        return value.to_dict()
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_export(v) for v in value]
    return value


class HelixEntity(Generic[D]):
    """
    Base class for objects built from one raw API row.

    The raw data and the client are private: they never appear in
    to_dict() or repr(). Only names listed in 'exported_fields' do.

    Architectural Note:
    -------------------
    Derived values (e.g. a list of child entities) are cached per
    instance through '_cached'. A new instance built from fresh data
    starts with an empty cache.
    """

    data_model: ClassVar[type[BaseModel]]
    exported_fields: ClassVar[tuple[str, ...]] = ()

    def __init__(self, data: D, client: "ApiClient"):
        self._data = data
        self._client = client
        self._derived = DerivedValueCache()

    @classmethod
    def from_row(cls: type[E], row: Row, client: "ApiClient") -> E:
        """
        Validates a raw row and wraps it.

        Raises:
            MappingError: If the row does not match the data model
        """
        try:
            data = cls.data_model.model_validate(row)
        except PydanticValidationError as e:
            raise MappingError(
                f"Malformed {cls.__name__} row: {e.error_count()} validation error(s)",
                row=row,
                original_error=e,
            ) from e
        return cls(data, client)

    @classmethod
    def mapper(cls: type[E], client: "ApiClient") -> ResultMapper[E]:
        """Returns a row -> entity function bound to the given client."""
        return lambda row: cls.from_row(row, client)

    def _cached(self, name: str, compute: Callable[[], Any]) -> Any:
        return self._derived.get(name, compute)

    def to_dict(self) -> dict[str, Any]:
        """
        Exports the public fields only.
        Nested entities and pydantic models are exported recursively.
        """
        return {name: _export(getattr(self, name)) for name in self.exported_fields}

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.exported_fields)
        return f"{type(self).__name__}({fields})"


class BaseApi:
    """Base class for the Helix API groups."""

    def __init__(self, client: "ApiClient"):
        self._client = client

    def _get_paginated_result(
        self, descriptor: RequestDescriptor, entity_cls: type[E]
    ) -> PaginatedResult[E]:
        page = self._client.fetch_page(descriptor)
        return create_paginated_result(page, entity_cls.mapper(self._client))

    def _paginate(self, descriptor: RequestDescriptor, entity_cls: type[E]) -> Paginator[E]:
        return Paginator(descriptor, self._client, entity_cls.mapper(self._client))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
