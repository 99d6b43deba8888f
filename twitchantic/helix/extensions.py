from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..pagination import PaginatedResult, Paginator
from ..request import HelixPagination, RequestDescriptor, make_pagination_query
from .base import BaseApi, HelixEntity


class HelixExtensionProductCost(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    amount: int
    type: str


class HelixExtensionProductData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    sku: str
    cost: HelixExtensionProductCost
    display_name: str = Field(default="", alias="displayName")
    in_development: bool = Field(default=False, alias="inDevelopment")


class HelixExtensionTransactionData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    timestamp: datetime
    broadcaster_id: str
    broadcaster_name: str = ""
    user_id: str
    user_name: str = ""
    product_type: str
    product_data: HelixExtensionProductData


class HelixExtensionTransaction(HelixEntity[HelixExtensionTransactionData]):
    """A bits transaction made inside an extension."""

    data_model = HelixExtensionTransactionData
    exported_fields = (
        "id",
        "transaction_date",
        "broadcaster_id",
        "user_id",
        "product_sku",
        "product_cost",
    )

    @property
    def id(self) -> str:
        return self._data.id

    @property
    def transaction_date(self) -> datetime:
        return self._data.timestamp

    @property
    def broadcaster_id(self) -> str:
        return self._data.broadcaster_id

    @property
    def broadcaster_display_name(self) -> str:
        return self._data.broadcaster_name

    @property
    def user_id(self) -> str:
        return self._data.user_id

    @property
    def user_display_name(self) -> str:
        return self._data.user_name

    @property
    def product_type(self) -> str:
        return self._data.product_type

    @property
    def product_sku(self) -> str:
        return self._data.product_data.sku

    @property
    def product_cost(self) -> int:
        """The cost of the product, in bits."""
        return self._data.product_data.cost.amount

    @property
    def product_display_name(self) -> str:
        return self._data.product_data.display_name

    @property
    def product_in_development(self) -> bool:
        return self._data.product_data.in_development


class HelixExtensionTransactionsFilter(HelixPagination):
    """
    Filters for the extension transactions request.

    Attributes:
        transaction_ids: Only return these transactions
    """

    transaction_ids: list[str] | None = None


class HelixExtensionsApi(BaseApi):
    """The Helix API methods that deal with extensions."""

    def get_extension_transactions(
        self, extension_id: str, filter: HelixExtensionTransactionsFilter | None = None
    ) -> PaginatedResult[HelixExtensionTransaction]:
        """
        Retrieves one page of transactions for the given extension.

        Args:
            extension_id: The ID of the extension to retrieve transactions for
            filter: Transaction IDs and pagination options
        """
        filter = filter or HelixExtensionTransactionsFilter()
        query: dict[str, Any] = {
            "extension_id": extension_id,
            "id": filter.transaction_ids,
            **make_pagination_query(filter),
        }
        descriptor = RequestDescriptor(url="extensions/transactions", query=query)
        return self._get_paginated_result(descriptor, HelixExtensionTransaction)

    def get_extension_transactions_paginated(
        self, extension_id: str, filter: HelixExtensionTransactionsFilter | None = None
    ) -> Paginator[HelixExtensionTransaction]:
        """
        Creates a paginator over transactions for the given extension.

        Only 'transaction_ids' is taken from the filter; the paginator
        manages cursors itself.
        """
        transaction_ids = filter.transaction_ids if filter else None
        descriptor = RequestDescriptor(
            url="extensions/transactions",
            query={"extension_id": extension_id, "id": transaction_ids},
        )
        return self._paginate(descriptor, HelixExtensionTransaction)
