import pytest

from lift.naming import Naming


@pytest.mark.parametrize("function_name, logical_id", [
    ("backend", "BackendLambdaFunction"),
    ("myApi", "MyApiLambdaFunction"),
    ("my-api", "MyDashapiLambdaFunction"),
    ("my_api", "MyUnderscoreapiLambdaFunction"),
])
def test_lambda_logical_id(function_name, logical_id):
    assert Naming().get_lambda_logical_id(function_name) == logical_id


def test_function_url_logical_id():
    assert Naming().get_lambda_function_url_logical_id("backend") == "BackendLambdaFunctionUrl"
