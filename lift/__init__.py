from lift.errors import ServerlessError
from lift.mono_api import ApiVariant, MonoApi, create_construct
from lift.naming import Naming
from lift.provider import AwsProvider

__all__ = [
    "ApiVariant",
    "AwsProvider",
    "MonoApi",
    "Naming",
    "ServerlessError",
    "create_construct",
]
