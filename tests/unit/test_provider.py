import datetime

import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from lift import MonoApi


def stack_description(outputs):
    return {
        "Stacks": [
            {
                "StackName": "app-dev",
                "CreationTime": datetime.datetime(2024, 1, 1),
                "StackStatus": "UPDATE_COMPLETE",
                "Outputs": outputs,
            },
        ],
    }


@pytest.fixture
def api(stack, provider):
    return MonoApi(stack, "backend", {"functionName": "backend"}, provider)


def test_stack_name_and_region(provider):
    assert provider.stack_name == "app-dev"
    assert provider.region == "us-east-1"


def test_reads_outputs_of_the_deployed_stack(stack, provider, api):
    domain_key = stack.resolve(api.domain_output.logical_id)
    cname_key = stack.resolve(api.cname_output.logical_id)
    distribution_id_key = stack.resolve(api.distribution_id_output.logical_id)
    outputs = [
        {"OutputKey": domain_key, "OutputValue": "api.example.com"},
        {"OutputKey": cname_key, "OutputValue": "d111111abcdef8.cloudfront.net"},
        {"OutputKey": distribution_id_key, "OutputValue": "EDFDVBD632BHDS5"},
    ]

    with Stubber(provider.cloudformation) as stubber:
        for _ in range(4):
            stubber.add_response("describe_stacks", stack_description(outputs), {"StackName": "app-dev"})

        assert api.get_domain() == "api.example.com"
        assert api.get_url() == "https://api.example.com"
        assert api.get_cname() == "d111111abcdef8.cloudfront.net"
        assert api.get_distribution_id() == "EDFDVBD632BHDS5"
        stubber.assert_no_pending_responses()


def test_output_readers_exposed_to_the_framework(provider, api):
    with Stubber(provider.cloudformation) as stubber:
        stubber.add_response("describe_stacks", stack_description([]), {"StackName": "app-dev"})

        assert api.outputs()["url"]() is None


def test_stack_not_deployed(provider, api):
    with Stubber(provider.cloudformation) as stubber:
        stubber.add_client_error(
            "describe_stacks",
            service_error_code="ValidationError",
            service_message="Stack with id app-dev does not exist",
            http_status_code=400,
        )

        assert api.get_url() is None


def test_other_errors_are_raised(provider, api):
    with Stubber(provider.cloudformation) as stubber:
        stubber.add_client_error(
            "describe_stacks",
            service_error_code="AccessDenied",
            service_message="User is not authorized to perform: cloudformation:DescribeStacks",
            http_status_code=403,
        )

        with pytest.raises(ClientError):
            api.get_cname()
