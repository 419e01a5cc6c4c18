"""
Product Handlers for MCP Server
Product library CRUD, search and batch operations
"""

import logging
from typing import Annotated, Any, List, Optional

from pydantic import Field, StrictInt

from ..models.common import FilterOperator, ToolArguments
from ..models.properties import ProductProperties
from .base import ToolDefinition, compact, id_inputs, joined, segment

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/crm/v3/objects/products"

MinimumLimit = Annotated[StrictInt, Field(ge=1)]


class ListProductsArguments(ToolArguments):
    limit: Optional[MinimumLimit] = None
    after: Optional[str] = None
    properties: Optional[List[str]] = None


class ReadProductArguments(ToolArguments):
    productId: str
    properties: Optional[List[str]] = None
    associations: Optional[List[str]] = None


class CreateProductArguments(ToolArguments):
    properties: ProductProperties


class UpdateProductArguments(ToolArguments):
    productId: str
    properties: ProductProperties


class ProductIdArguments(ToolArguments):
    productId: str


class ProductFilter(ToolArguments):
    propertyName: str
    operator: FilterOperator
    value: Any = None
    values: Optional[List[Any]] = None


class ProductFilterGroup(ToolArguments):
    filters: List[ProductFilter]


class SearchProductsArguments(ToolArguments):
    query: Optional[str] = None
    limit: Optional[MinimumLimit] = None
    after: Optional[str] = None
    sorts: Optional[List[str]] = None
    properties: Optional[List[str]] = None
    filterGroups: List[ProductFilterGroup]


class BatchArchiveProductsArguments(ToolArguments):
    productIds: List[str]


class BatchCreateProductsArguments(ToolArguments):
    inputs: List[CreateProductArguments]


class BatchReadProductsArguments(ToolArguments):
    propertiesWithHistory: List[str]
    idProperty: Optional[str] = None
    productIds: List[str]
    properties: List[str]


class ProductUpdateItem(ToolArguments):
    id: str
    idProperty: Optional[str] = None
    objectWriteTraceId: Optional[str] = None
    properties: ProductProperties


class BatchUpdateProductsArguments(ToolArguments):
    inputs: List[ProductUpdateItem]


def product_path(product_id: str) -> str:
    return f"{PRODUCTS_PATH}/{segment(product_id)}"


async def handle_products_list(client, params: ListProductsArguments):
    """Handle products_list tool"""
    return await client.execute(PRODUCTS_PATH, {
        "limit": params.limit,
        "after": params.after,
        "properties": joined(params.properties),
    })


async def handle_products_read(client, params: ReadProductArguments):
    """Handle products_read tool"""
    return await client.execute(product_path(params.productId), {
        "properties": joined(params.properties),
        "associations": joined(params.associations),
    })


async def handle_products_create(client, params: CreateProductArguments):
    """Handle products_create tool"""
    return await client.execute(PRODUCTS_PATH, method="POST", body=params.payload("properties"))


async def handle_products_update(client, params: UpdateProductArguments):
    """Handle products_update tool"""
    return await client.execute(product_path(params.productId), method="PATCH", body=params.payload("properties"))


async def handle_products_archive(client, params: ProductIdArguments):
    """Handle products_archive tool"""
    return await client.execute(product_path(params.productId), method="DELETE")


async def handle_products_search(client, params: SearchProductsArguments):
    """Handle products_search tool"""
    body = params.payload("filterGroups", "properties", "limit", "after", "sorts", "query")
    return await client.execute(f"{PRODUCTS_PATH}/search", method="POST", body=body)


async def handle_products_batch_archive(client, params: BatchArchiveProductsArguments):
    """Handle products_batch_archive tool"""
    body = {"inputs": id_inputs(params.productIds)}
    return await client.execute(f"{PRODUCTS_PATH}/batch/archive", method="POST", body=body)


async def handle_products_batch_create(client, params: BatchCreateProductsArguments):
    """Handle products_batch_create tool"""
    return await client.execute(f"{PRODUCTS_PATH}/batch/create", method="POST", body=params.payload("inputs"))


async def handle_products_batch_read(client, params: BatchReadProductsArguments):
    """Handle products_batch_read tool"""
    body = compact({
        "propertiesWithHistory": params.propertiesWithHistory,
        "idProperty": params.idProperty,
        "inputs": id_inputs(params.productIds),
        "properties": params.properties,
    })
    return await client.execute(f"{PRODUCTS_PATH}/batch/read", method="POST", body=body)


async def handle_products_batch_update(client, params: BatchUpdateProductsArguments):
    """Handle products_batch_update tool"""
    return await client.execute(f"{PRODUCTS_PATH}/batch/update", method="POST", body=params.payload("inputs"))


def product_tools() -> List[ToolDefinition]:
    return [
        ToolDefinition(
            name="products_list",
            description=(
                "Read a page of products. Control what is returned via the `properties` query param. "
                "`after` is the paging cursor token of the last successfully read resource will be returned "
                "as the `paging.next.after` JSON property of a paged response containing more results."
            ),
            arguments=ListProductsArguments,
            handler=handle_products_list,
        ),
        ToolDefinition(
            name="products_read",
            description="Read an Object identified by ID",
            arguments=ReadProductArguments,
            handler=handle_products_read,
        ),
        ToolDefinition(
            name="products_create",
            description="Create a product with the given properties and return a copy of the object, including the ID.",
            arguments=CreateProductArguments,
            handler=handle_products_create,
        ),
        ToolDefinition(
            name="products_update",
            description=(
                "Perform a partial update of an Object identified by ID. Read-only and non-existent properties "
                "will result in an error. Properties values can be cleared by passing an empty string."
            ),
            arguments=UpdateProductArguments,
            handler=handle_products_update,
        ),
        ToolDefinition(
            name="products_archive",
            description="Move an Object identified by ID to the recycling bin.",
            arguments=ProductIdArguments,
            handler=handle_products_archive,
        ),
        ToolDefinition(
            name="products_search",
            description="Search products",
            arguments=SearchProductsArguments,
            handler=handle_products_search,
        ),
        ToolDefinition(
            name="products_batch_archive",
            description="Archive (delete) a batch of products by ID",
            arguments=BatchArchiveProductsArguments,
            handler=handle_products_batch_archive,
        ),
        ToolDefinition(
            name="products_batch_create",
            description="Create a batch of products",
            arguments=BatchCreateProductsArguments,
            handler=handle_products_batch_create,
        ),
        ToolDefinition(
            name="products_batch_read",
            description=(
                "Read a batch of products by internal ID, or unique property values. Retrieve records by the "
                "`idProperty` parameter to retrieve records by a custom unique value property."
            ),
            arguments=BatchReadProductsArguments,
            handler=handle_products_batch_read,
        ),
        ToolDefinition(
            name="products_batch_update",
            description=(
                "Update a batch of products by internal ID, or unique values specified by the "
                "`idProperty` query param."
            ),
            arguments=BatchUpdateProductsArguments,
            handler=handle_products_batch_update,
        ),
    ]
