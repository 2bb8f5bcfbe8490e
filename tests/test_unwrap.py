from __future__ import annotations

import copy

import pytest

from core.domain.errors import UnwrapError, UnwrapErrorKind
from core.services.unwrap import unwrap, unwrap_data, unwrap_operation, unwrap_resource
from tests.conftest import PRODUCT, FailingFetchResponse, FakeFetchResponse

SHAPES = ("fetch", "object", "merged")


@pytest.mark.asyncio
async def test_returns_only_given_operation_from_data() -> None:
    response = FakeFetchResponse(
        {
            "data": {
                "productCreate": {
                    "product": {"title": "Cotton T-Shirt", "id": "gid://shopify/Product/5070746714248"},
                    "userErrors": [],
                }
            }
        }
    )

    unwrapped = await unwrap(response, "productCreate")

    assert unwrapped == {
        "product": {"title": "Cotton T-Shirt", "id": "gid://shopify/Product/5070746714248"},
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("shape", SHAPES)
async def test_returns_only_given_resource_from_data(shape, make_response, product_create_data) -> None:
    response = make_response(shape, product_create_data)

    assert await unwrap(response, "productCreate", "product") == PRODUCT


@pytest.mark.asyncio
async def test_whole_payload_is_identical_across_shapes(make_response, product_create_data) -> None:
    results = [await unwrap(make_response(shape, product_create_data)) for shape in SHAPES]

    assert results[0] == results[1] == results[2] == product_create_data


@pytest.mark.asyncio
@pytest.mark.parametrize("shape", ("fetch", "object"))
@pytest.mark.parametrize("narrowing", [(), ("productCreate",), ("productCreate", "product")])
async def test_no_data_fails_regardless_of_narrowing(shape, narrowing, make_response) -> None:
    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(make_response(shape, None), *narrowing)

    assert excinfo.value.kind is UnwrapErrorKind.NO_DATA
    assert str(excinfo.value) == "No data returned in shopify response."


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [None, {}, {"errors": []}, 42, "data"])
async def test_unrecognized_responses_have_no_data(response) -> None:
    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response)

    assert excinfo.value.kind is UnwrapErrorKind.NO_DATA


@pytest.mark.asyncio
async def test_operation_missing() -> None:
    response = FakeFetchResponse({"data": {}})

    with pytest.raises(UnwrapError, match='Operation "productCreate" does not exist in shopify response.') as excinfo:
        await unwrap(response, "productCreate")

    assert excinfo.value.kind is UnwrapErrorKind.OPERATION_NOT_FOUND
    assert excinfo.value.operation == "productCreate"


@pytest.mark.asyncio
async def test_operation_present_but_null_counts_as_missing() -> None:
    with pytest.raises(UnwrapError) as excinfo:
        await unwrap({"data": {"productCreate": None}}, "productCreate")

    assert excinfo.value.kind is UnwrapErrorKind.OPERATION_NOT_FOUND


@pytest.mark.asyncio
async def test_empty_operation_exists_but_resource_does_not() -> None:
    response = FakeFetchResponse({"data": {"productCreate": {}}})

    assert await unwrap(response, "productCreate") == {}

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "productCreate", "product")

    assert excinfo.value.kind is UnwrapErrorKind.RESOURCE_NOT_FOUND
    assert str(excinfo.value) == 'Resource "product" does not exist in shopify response.'
    assert excinfo.value.resource == "product"


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [{}, [], 0, "", False])
async def test_falsy_resources_are_present(value) -> None:
    response = {"data": {"productCreate": {"product": value, "userErrors": []}}}

    assert await unwrap(response, "productCreate", "product") == value


@pytest.mark.asyncio
async def test_user_errors_raise_core_user_errors() -> None:
    user_errors = [{"field": "handle", "message": "Handle already exists"}]
    response = FakeFetchResponse({"data": {"productCreate": {"product": None, "userErrors": user_errors}}})

    with pytest.raises(UnwrapError, match="User errors returned in shopify response.") as excinfo:
        await unwrap(response, "productCreate")

    assert excinfo.value.kind is UnwrapErrorKind.CORE_USER_ERRORS
    assert excinfo.value.user_errors == user_errors
    assert excinfo.value.formatted_user_errors == ["handle: Handle already exists"]


@pytest.mark.asyncio
async def test_customer_user_errors_take_precedence() -> None:
    customer_errors = [{"field": ["password"], "message": "Password is incorrect"}]
    response = {
        "data": {
            "customerAccessTokenCreate": {
                "customerAccessToken": None,
                "customerUserErrors": customer_errors,
                "userErrors": [{"field": ["password"], "message": "Invalid"}],
            }
        }
    }

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "customerAccessTokenCreate")

    assert excinfo.value.kind is UnwrapErrorKind.CUSTOMER_USER_ERRORS
    assert excinfo.value.user_errors == customer_errors


@pytest.mark.asyncio
async def test_customer_user_errors_alone() -> None:
    customer_errors = [{"field": ["password"], "message": "Password is incorrect"}]
    response = {
        "data": {
            "customerAccessTokenCreate": {"customerUserErrors": customer_errors, "userErrors": []},
        }
    }

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "customerAccessTokenCreate")

    assert excinfo.value.kind is UnwrapErrorKind.CUSTOMER_USER_ERRORS
    assert excinfo.value.errors == customer_errors
    assert str(excinfo.value) == "Customer user errors returned in shopify response."


@pytest.mark.asyncio
async def test_empty_customer_errors_fall_through_to_user_errors() -> None:
    response = {
        "data": {
            "customerCreate": {
                "customerUserErrors": [],
                "userErrors": [{"field": ["email"], "message": "Taken"}],
            }
        }
    }

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "customerCreate")

    assert excinfo.value.kind is UnwrapErrorKind.CORE_USER_ERRORS


@pytest.mark.asyncio
@pytest.mark.parametrize("shape", SHAPES)
@pytest.mark.parametrize("narrowing", [(), ("productCreate",), ("missing", "product")])
async def test_graphql_errors_win_over_everything(shape, narrowing, make_response, product_create_data) -> None:
    errors = [{"message": "Throttled", "extensions": {"code": "THROTTLED"}}]

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(make_response(shape, product_create_data, errors), *narrowing)

    assert excinfo.value.kind is UnwrapErrorKind.GRAPHQL_ERRORS
    assert excinfo.value.errors == errors
    assert str(excinfo.value) == "Throttled"


@pytest.mark.asyncio
async def test_graphql_errors_without_message_use_fallback() -> None:
    with pytest.raises(UnwrapError) as excinfo:
        await unwrap({"data": None, "errors": [{"extensions": {"code": "INTERNAL"}}]})

    assert str(excinfo.value) == "Shopify returned one or more GraphQL errors."


@pytest.mark.asyncio
async def test_graphql_client_error_object_is_reported() -> None:
    # El graphql-client de Shopify envía `errors` como objeto, no lista.
    errors = {"networkStatusCode": 401, "message": "GraphQL Client: Unauthorized"}
    response = FakeFetchResponse({"errors": errors})

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "productCreate")

    assert excinfo.value.kind is UnwrapErrorKind.GRAPHQL_ERRORS
    assert excinfo.value.errors == [errors]
    assert str(excinfo.value) == "GraphQL Client: Unauthorized"


@pytest.mark.asyncio
async def test_errors_only_mapping_reports_errors() -> None:
    with pytest.raises(UnwrapError) as excinfo:
        await unwrap({"errors": [{"message": "Access denied"}]})

    assert excinfo.value.kind is UnwrapErrorKind.GRAPHQL_ERRORS


@pytest.mark.asyncio
async def test_original_response_is_not_mutated() -> None:
    response = {
        "data": {
            "productCreate": {
                "product": dict(PRODUCT),
                "userErrors": [],
                "customerUserErrors": [],
            }
        }
    }
    snapshot = copy.deepcopy(response)

    result = await unwrap(response, "productCreate")

    assert result == {"product": PRODUCT}
    assert response == snapshot
    assert "userErrors" in response["data"]["productCreate"]
    assert result is not response["data"]["productCreate"]


@pytest.mark.asyncio
async def test_unwrap_is_idempotent() -> None:
    response = FakeFetchResponse({"data": {"productCreate": {"product": dict(PRODUCT), "userErrors": []}}})

    first = await unwrap(response, "productCreate", "product")
    second = await unwrap(response, "productCreate", "product")

    assert first == second == PRODUCT
    assert response.calls == 2


@pytest.mark.asyncio
async def test_accessor_failures_propagate() -> None:
    response = FailingFetchResponse(ConnectionError("connection reset"))

    with pytest.raises(ConnectionError, match="connection reset"):
        await unwrap(response, "productCreate")


@pytest.mark.asyncio
async def test_explicit_entry_points(product_create_data) -> None:
    response = {"data": product_create_data}

    assert await unwrap_data(response) == product_create_data
    assert await unwrap_operation(response, "productCreate") == {"product": PRODUCT}
    assert await unwrap_resource(response, "productCreate", "product") == PRODUCT


@pytest.mark.asyncio
async def test_non_mapping_operation_result_is_returned_as_is() -> None:
    response = {"data": {"shopName": "Acme"}}

    assert await unwrap(response, "shopName") == "Acme"

    with pytest.raises(UnwrapError) as excinfo:
        await unwrap(response, "shopName", "name")

    assert excinfo.value.kind is UnwrapErrorKind.RESOURCE_NOT_FOUND
