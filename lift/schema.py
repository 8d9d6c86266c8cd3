from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lift.errors import INVALID_CONSTRUCT_CONFIGURATION, ServerlessError


class ApiVariant(str, Enum):
    """
    PLAIN fronts an API: the request function only forwards the Host header.
    SINGLE_PAGE_APP also rewrites non-asset paths to /index.html.
    """
    PLAIN = "mono-api2"
    SINGLE_PAGE_APP = "mono-api"


class MonoApi2Configuration(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    type: Literal["mono-api2"] = "mono-api2"
    function_name: Optional[str] = Field(default=None, alias="functionName")
    domain: Optional[str] = None
    certificate: Optional[str] = None
    forwarded_headers: Optional[List[str]] = Field(default=None, alias="forwardedHeaders")


class SecurityConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    allow_iframe: Optional[bool] = Field(default=None, alias="allowIframe")


class MonoApiConfiguration(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    type: Literal["mono-api"] = "mono-api"
    path: str
    domain: Optional[Union[str, List[str]]] = None
    certificate: Optional[str] = None
    function_name: Optional[str] = Field(default=None, alias="functionName")
    security: Optional[SecurityConfiguration] = None
    error_page: Optional[str] = Field(default=None, alias="errorPage")
    redirect_to_main_domain: Optional[bool] = Field(default=None, alias="redirectToMainDomain")
    forwarded_headers: Optional[List[str]] = Field(default=None, alias="forwardedHeaders")


Configuration = Union[MonoApi2Configuration, MonoApiConfiguration]

SCHEMAS = {
    ApiVariant.PLAIN: MonoApi2Configuration,
    ApiVariant.SINGLE_PAGE_APP: MonoApiConfiguration,
}


# Keys a definition can contain, as written in the configuration
CONFIGURATION_KEYS = frozenset(
    field.alias or name
    for model in (MonoApi2Configuration, MonoApiConfiguration, SecurityConfiguration)
    for name, field in model.model_fields.items()
)


def configuration_path(error: Dict[str, Any]) -> List[Union[str, int]]:
    """
    Location of a validation error in the definition.
    Pydantic adds the union member being tried to the location (e.g. 'domain.str'), those are not keys.
    """
    location = list(error["loc"])
    if error["type"] == "extra_forbidden":
        # The last part is the unknown key itself
        *parents, unknown_key = location
        return [part for part in parents if isinstance(part, int) or part in CONFIGURATION_KEYS] + [unknown_key]
    return [part for part in location if isinstance(part, int) or part in CONFIGURATION_KEYS]


def parse_configuration(construct_id: str, definition: Dict[str, Any], variant: ApiVariant) -> Configuration:
    """
    Validates a raw construct definition against the schema of `variant`.
    The first schema violation is reported as a ServerlessError pointing at the offending key.
    """
    schema = SCHEMAS[variant]
    try:
        return schema.model_validate(definition)
    except ValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in (construct_id, *configuration_path(error)))
        raise ServerlessError(
            f"Invalid configuration in 'constructs.{location}': {error['msg']}.",
            INVALID_CONSTRUCT_CONFIGURATION,
        ) from e


def flatten_domains(domain: Optional[Union[str, List[str]]]) -> Optional[List[str]]:
    if domain is None:
        return None
    if isinstance(domain, str):
        return [domain]
    return list(domain)
