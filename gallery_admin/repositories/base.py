"""Base repository with common CRUD operations over a REST resource."""
from typing import Any, Generic, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter

from gallery_admin.core.exceptions import NotFoundException
from gallery_admin.core.http import ApiClient
from gallery_admin.models.schemas.common import PaginationParams, SuccessResponse

SchemaType = TypeVar("SchemaType", bound=BaseModel)

Payload = Union[BaseModel, dict[str, Any]]


class BaseRepository(Generic[SchemaType]):
    """Base repository providing common REST operations."""

    resource_name = "Resource"

    def __init__(self, schema: Type[SchemaType], api: ApiClient, endpoint: str):
        """
        Initialize repository.

        Args:
            schema: Pydantic model the endpoint returns
            api: API client
            endpoint: Collection path, e.g. ``/admin/media``
        """
        self.schema = schema
        self.api = api
        self.endpoint = endpoint.rstrip("/")
        self._list_adapter = TypeAdapter(List[schema])

    def _item_path(self, id: str) -> str:
        return f"{self.endpoint}/{id}"

    def _parse(self, data: Any) -> SchemaType:
        return self.schema.model_validate(data)

    def _parse_list(self, data: Any) -> List[SchemaType]:
        # Some endpoints wrap the page in {"items": [...]}
        if isinstance(data, dict) and "items" in data:
            data = data["items"]
        return self._list_adapter.validate_python(data)

    @staticmethod
    def _body(payload: Payload) -> dict[str, Any]:
        if isinstance(payload, BaseModel):
            return payload.model_dump(exclude_unset=True, mode="json")
        return payload

    async def get_by_id(self, id: str) -> Optional[SchemaType]:
        """
        Get entity by ID.

        Args:
            id: Entity id

        Returns:
            Entity or None if not found
        """
        try:
            return await self.get_by_id_or_fail(id)
        except NotFoundException:
            return None

    async def get_by_id_or_fail(self, id: str) -> SchemaType:
        """
        Get entity by ID or raise exception.

        Args:
            id: Entity id

        Returns:
            Entity

        Raises:
            NotFoundException: If entity not found
        """
        try:
            data = await self.api.get(self._item_path(id))
        except NotFoundException:
            raise NotFoundException(resource=self.resource_name, identifier=str(id))
        return self._parse(data)

    async def get_all(
        self,
        pagination: Optional[PaginationParams] = None,
        **params: Any
    ) -> List[SchemaType]:
        """
        Get one page of entities.

        Args:
            pagination: Page and page size
            **params: Extra query parameters; ``None`` values are dropped

        Returns:
            List of entities
        """
        query: dict[str, Any] = (pagination or PaginationParams()).to_query()
        query.update(params)
        data = await self.api.get(self.endpoint, params=query)
        return self._parse_list(data)

    async def create(self, payload: Payload) -> SchemaType:
        """
        Create new entity.

        Args:
            payload: Fields of the new entity

        Returns:
            Created entity with its generated ID
        """
        data = await self.api.post(self.endpoint, json=self._body(payload))
        return self._parse(data)

    async def update(self, id: str, payload: Payload) -> SchemaType:
        """
        Update entity by ID.

        Args:
            id: Entity id
            payload: Fields to change

        Returns:
            Updated entity

        Raises:
            NotFoundException: If entity not found
        """
        try:
            data = await self.api.put(self._item_path(id), json=self._body(payload))
        except NotFoundException:
            raise NotFoundException(resource=self.resource_name, identifier=str(id))
        return self._parse(data)

    async def delete(self, id: str) -> bool:
        """
        Delete entity by ID.

        Args:
            id: Entity id

        Returns:
            True if deleted, False if not found
        """
        try:
            data = await self.api.delete(self._item_path(id))
        except NotFoundException:
            return False
        if isinstance(data, dict):
            return SuccessResponse.model_validate(data).success
        return True
