"""
Shared argument models for HubSpot tools
Object types, associations, search filters and property definitions
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, create_model

Number = Union[StrictInt, StrictFloat]
Flag = StrictBool
PageLimit = Annotated[StrictInt, Field(ge=1, le=100)]

Email = Annotated[str, Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")]
Url = Annotated[str, Field(pattern=r"^[A-Za-z][A-Za-z0-9+.-]*://\S+$")]

ObjectType = Literal["companies", "contacts", "deals", "tickets", "products", "line_items", "quotes", "custom"]

FilterOperator = Literal[
    "EQ", "NEQ", "LT", "LTE", "GT", "GTE", "BETWEEN", "IN", "NOT_IN",
    "HAS_PROPERTY", "NOT_HAS_PROPERTY", "CONTAINS_TOKEN", "NOT_CONTAINS_TOKEN",
]

LegalBasis = Literal[
    "LEGITIMATE_INTEREST_CLIENT",
    "LEGITIMATE_INTEREST_PUB",
    "PERFORMANCE_OF_CONTRACT",
    "CONSENT_WITH_NOTICE",
    "CONSENT_WITH_NOTICE_AND_OPT_OUT",
]

SubscriptionStatus = Literal["SUBSCRIBED", "UNSUBSCRIBED", "NOT_OPTED"]


class ToolArguments(BaseModel):
    """Base for tool argument models, unknown arguments are dropped"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    def payload(self, *fields: str) -> Dict[str, Any]:
        """Request body form: wire names, only fields the caller set, optionally only ``fields``

        Top-level nulls are dropped, explicit nulls inside nested values are kept.
        """
        body = self.model_dump(include=set(fields) or None, by_alias=True, exclude_unset=True)
        return {key: value for key, value in body.items() if value is not None}


class PropertyValues(BaseModel):
    """Base for CRM property maps, known fields are checked and custom properties pass through"""
    model_config = ConfigDict(extra="allow")


class ObjectRef(ToolArguments):
    id: str


class AssociationType(ToolArguments):
    associationCategory: str
    associationTypeId: Number


class AssociationInput(ToolArguments):
    """Association attached to a newly created record"""
    to: ObjectRef
    types: List[AssociationType]


class SearchFilter(ToolArguments):
    propertyName: str
    operator: FilterOperator
    value: Any = None


class FilterGroup(ToolArguments):
    filters: List[SearchFilter]


class SearchSort(ToolArguments):
    propertyName: str
    direction: Literal["ASCENDING", "DESCENDING"]


class SearchArguments(ToolArguments):
    """Body of a CRM search request"""
    filterGroups: List[FilterGroup]
    properties: Optional[List[str]] = None
    limit: Optional[PageLimit] = None
    after: Optional[str] = None
    sorts: Optional[List[SearchSort]] = None


class ObjectSearchArguments(SearchArguments):
    objectType: ObjectType


class PropertyOption(ToolArguments):
    label: str
    value: str
    description: Optional[str] = None
    displayOrder: Optional[Number] = None
    hidden: Optional[Flag] = None


class PropertyDefinitionArguments(ToolArguments):
    """A new custom property for a CRM object type"""
    name: str
    label: str
    type: Literal["string", "number", "date", "datetime", "enumeration", "bool"]
    fieldType: Literal["text", "textarea", "select", "radio", "checkbox", "number", "date", "file"]
    groupName: str
    description: Optional[str] = None
    options: Optional[List[PropertyOption]] = None
    displayOrder: Optional[Number] = None
    hasUniqueValue: Optional[Flag] = None
    hidden: Optional[Flag] = None
    formField: Optional[Flag] = None


class PropertyListArguments(ToolArguments):
    archived: Optional[Flag] = None
    properties: Optional[List[str]] = None


def arguments_model(name: str, **fields: Tuple[Any, Any]) -> Type[ToolArguments]:
    """Build a ToolArguments subclass, for tools whose id field names vary by resource"""
    return create_model(name, __base__=ToolArguments, **fields)


def choice_list(values: Tuple[str, ...]) -> Any:
    """List of values restricted to ``values``"""
    return List[Literal[values]]  # type: ignore[valid-type]
