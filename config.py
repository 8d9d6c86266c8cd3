import os
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from a .env file
load_dotenv()

class EnvConfig:
    """
    Stores stage-specific configuration for the service stack.
    """
    def __init__(
        self,
        service: str,
        stage: str,
        account: str,
        region: str,
        functions: Optional[Dict[str, Dict[str, Any]]] = None,
        constructs: Optional[Dict[str, Dict[str, Any]]] = None
    ):
        self.service = service
        self.name = stage
        self.account = account
        self.region = region

        # Lambda functions of the service, keyed by function name
        self.functions = functions or {}
        # Lift constructs, keyed by construct id
        self.constructs = constructs or {}

    @property
    def stack_name(self) -> str:
        # Same naming as the Serverless Framework: <service>-<stage>
        return f"{self.service}-{self.name}"

def get_required_env(key: str) -> str:
    """
    Retrieves a required environment variable or raises a RuntimeError if missing.
    """
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"❌ MISSING CONFIG: Required environment variable '{key}' not found in .env")
    return value

def get_config(scope) -> EnvConfig:
    """
    Factory function to generate the EnvConfig object based on CDK context.
    Usage: cdk deploy -c env=prod
    """
    # Default to 'dev' stage if no context is provided
    stage = scope.node.try_get_context("env") or "dev"
    service = scope.node.try_get_context("service") or "app"
    prefix = stage.upper()

    print(f"🔍 Initializing CDK Infrastructure for {service} stage: {prefix}")

    # Load Mandatory Variables
    account = get_required_env(f"{prefix}_ACCOUNT")
    region = get_required_env(f"{prefix}_REGION")

    # Functions and constructs are declared in cdk.json (or passed with -c)
    functions = scope.node.try_get_context("functions") or {}
    constructs = scope.node.try_get_context("constructs") or {}

    return EnvConfig(
        service=service,
        stage=stage,
        account=account,
        region=region,
        functions=functions,
        constructs=constructs
    )
