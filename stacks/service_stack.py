from typing import Any, Dict
from aws_cdk import (
    Stack,
    aws_lambda as lambda_,
)
from constructs import Construct

from lift import AwsProvider, MonoApi, create_construct

RUNTIMES = {
    "python3.11": lambda_.Runtime.PYTHON_3_11,
    "python3.12": lambda_.Runtime.PYTHON_3_12,
    "python3.13": lambda_.Runtime.PYTHON_3_13,
}

class ServiceStack(Stack):
    """
    Deploys a service the way the Serverless Framework lays it out:
    1. Lambda Functions with a public Function URL, under the Serverless logical ids.
    2. One Lift construct per entry of the 'constructs' configuration.
    """
    def __init__(self, scope: Construct, construct_id: str, config, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.provider = AwsProvider(self)

        # =================================================================
        # 1. FUNCTIONS
        # =================================================================
        self.functions: Dict[str, lambda_.Function] = {}
        for function_name, definition in config.functions.items():
            self.functions[function_name] = self.create_function(function_name, definition)

        # =================================================================
        # 2. CONSTRUCTS
        # =================================================================
        # Each construct validates its own configuration and fails the synth if invalid
        self.constructs: Dict[str, MonoApi] = {}
        for lift_id, definition in config.constructs.items():
            self.constructs[lift_id] = create_construct(self, lift_id, definition, self.provider)

    def create_function(self, function_name: str, definition: Dict[str, Any]) -> lambda_.Function:
        naming = self.provider.naming

        fn = lambda_.Function(self, naming.get_lambda_logical_id(function_name),
            runtime=RUNTIMES[definition.get("runtime", "python3.12")],
            handler=definition.get("handler", "main.lambda_handler"),
            code=lambda_.Code.from_asset(definition.get("code", "lambda/backend")),
        )
        # Logical ids must match the Serverless naming so that constructs can reference them
        fn.node.default_child.override_logical_id(naming.get_lambda_logical_id(function_name))

        # The function is only exposed through CloudFront, which does not forward the Host header
        fn_url = fn.add_function_url(
            auth_type=lambda_.FunctionUrlAuthType.NONE,
        )
        fn_url.node.default_child.override_logical_id(naming.get_lambda_function_url_logical_id(function_name))

        return fn
