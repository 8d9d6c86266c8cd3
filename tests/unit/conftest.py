import aws_cdk as core
import boto3
import pytest

from lift import AwsProvider



@pytest.fixture
def stack():
    app = core.App()
    return core.Stack(app, "app-dev", env=core.Environment(account="123456789012", region="us-east-1"))


@pytest.fixture
def provider(stack):
    session = boto3.Session(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        region_name="us-east-1",
    )
    return AwsProvider(stack, session=session)
