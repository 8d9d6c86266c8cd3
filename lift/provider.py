import logging
from typing import Optional

import boto3
from aws_cdk import CfnOutput, Fn, Stack, Token
from botocore.exceptions import ClientError

from lift.naming import Naming

logger = logging.getLogger(__name__)


class AwsProvider:
    """
    Everything the constructs need to know about the stack they are deployed in:
    its name and region, the logical id conventions and a reader for the
    outputs of the deployed stack.
    """
    def __init__(self, stack: Stack, naming: Optional[Naming] = None, session: Optional[boto3.Session] = None):
        self.stack = stack
        self.naming = naming or Naming()
        self._session = session
        self._cloudformation = None

    @property
    def stack_name(self) -> str:
        return self.stack.stack_name

    @property
    def region(self) -> str:
        return self.stack.region

    def function_url_domain(self, function_name: str) -> str:
        """
        Host of the Function URL of `function_name`, e.g. 'abc.lambda-url.us-east-1.on.aws'.
        """
        logical_id = self.naming.get_lambda_function_url_logical_id(function_name)
        function_url = Fn.get_att(logical_id, "FunctionUrl").to_string()

        # 'https://<host>/' -> '<host>'
        domain = Fn.select(1, Fn.split("://", function_url))
        return Fn.select(0, Fn.split("/", domain))

    def get_stack_output(self, output: CfnOutput) -> Optional[str]:
        """
        Reads the value of `output` from the deployed stack.
        Returns None if the stack is not deployed yet or doesn't have that output.
        """
        output_id = self.stack.resolve(output.logical_id)

        try:
            response = self.cloudformation.describe_stacks(StackName=self.stack_name)
        except ClientError as e:
            if "does not exist" in e.response["Error"]["Message"]:
                logger.info("Stack %s is not deployed, no value for output %s", self.stack_name, output_id)
                return None
            raise

        stacks = response.get("Stacks", [])
        if not stacks:
            return None

        for stack_output in stacks[0].get("Outputs", []):
            if stack_output["OutputKey"] == output_id:
                return stack_output["OutputValue"]

        logger.info("Output %s not found in stack %s", output_id, self.stack_name)
        return None

    @property
    def cloudformation(self):
        if self._cloudformation is None:
            session = self._session or boto3.Session()
            region = None if Token.is_unresolved(self.region) else self.region
            self._cloudformation = session.client("cloudformation", region_name=region)
        return self._cloudformation
