"""Base model classes and utilities for MongoDB documents.

This module provides base classes for all stored documents, including the
ObjectId type, common configuration and serialization helpers.
"""

from typing import Any, ClassVar, Dict, Optional, Type, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema


class PyObjectId(ObjectId):
    """Custom ObjectId type for Pydantic models.

    This class enables proper serialization and validation of MongoDB ObjectIds
    in Pydantic models.
    """

    @classmethod
    def __get_pydantic_core_schema__(
        cls, _source_type: Any, _handler: Any
    ) -> core_schema.CoreSchema:
        """Get the Pydantic core schema for PyObjectId."""
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(ObjectId),
                core_schema.chain_schema(
                    [
                        core_schema.str_schema(),
                        core_schema.no_info_plain_validator_function(cls.validate),
                    ]
                ),
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: str(x), return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        """Validate and convert a value to ObjectId.

        Args:
            value: The value to validate

        Returns:
            ObjectId: A valid ObjectId instance

        Raises:
            ValueError: If the value is not a valid ObjectId
        """
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError("Invalid ObjectId")

    @classmethod
    def __get_pydantic_json_schema__(
        cls, _core_schema: core_schema.CoreSchema, handler: Any
    ) -> JsonSchemaValue:
        """Get JSON schema for PyObjectId."""
        return handler(core_schema.str_schema())


T = TypeVar("T", bound="BaseDocument")


class BaseDocument(BaseModel):
    """Base model for all MongoDB documents.

    Subclasses set ``collection_name`` to the collection they are stored in.
    """

    collection_name: ClassVar[str] = ""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        arbitrary_types_allowed=True,
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")

    @field_validator("id", mode="before")
    @classmethod
    def validate_object_id(cls, value: Any) -> Optional[ObjectId]:
        """Validate ObjectId field."""
        if value is None:
            return None
        return PyObjectId.validate(value)

    @property
    def id_str(self) -> Optional[str]:
        """String form of the document id."""
        return str(self.id) if self.id is not None else None

    def to_mongo(self) -> Dict[str, Any]:
        """Convert model to a document ready for the driver.

        The ObjectId is kept as-is and a missing id is left out so MongoDB
        generates one.

        Returns:
            Dict[str, Any]: Document representation
        """
        data = self.model_dump(by_alias=True, exclude={"id"}, mode="python")
        if self.id is not None:
            data["_id"] = self.id
        return data

    def to_dict(self, **kwargs: Any) -> Dict[str, Any]:
        """Convert model to a JSON-friendly dictionary.

        Args:
            **kwargs: Additional arguments for model_dump

        Returns:
            Dict[str, Any]: Dictionary representation of the model
        """
        data = self.model_dump(by_alias=True, mode="json", **kwargs)
        if "_id" in data and data["_id"] is not None:
            data["_id"] = str(data["_id"])
        return data

    @classmethod
    def from_mongo(cls: Type[T], data: Optional[Dict[str, Any]]) -> Optional[T]:
        """Create model instance from a stored document.

        Args:
            data: Document returned by the driver

        Returns:
            Model instance, or None for a missing document
        """
        if data is None:
            return None
        return cls.model_validate(data)


class EmbeddedDocument(BaseModel):
    """Base model for embedded documents (subdocuments)."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )
