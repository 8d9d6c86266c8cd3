import logging
from typing import Any, Callable, Dict, List, Optional

from aws_cdk import (
    CfnOutput,
    Duration,
    Fn,
    aws_certificatemanager as acm,
    aws_cloudfront as cloudfront,
    aws_cloudfront_origins as origins,
)
from constructs import Construct

from lift.cloudfront_functions import (
    forward_host_function_code,
    redirect_to_main_domain,
    single_page_app_function_code,
)
from lift.errors import INVALID_CONSTRUCT_CONFIGURATION, ServerlessError
from lift.headers import headers_to_forward
from lift.provider import AwsProvider
from lift.schema import ApiVariant, Configuration, flatten_domains, parse_configuration

logger = logging.getLogger(__name__)


class MonoApi(Construct):
    """
    CloudFront distribution in front of the Function URL of a single Lambda function.

    Declares:
    1. An origin request policy forwarding cookies, query strings and an allow-list of headers.
    2. A cache policy that disables caching but keeps `Authorization` in the cache key
       (the only way to forward it to the origin).
    3. A CloudFront Function run on every viewer request.
    4. The distribution itself, plus the Domain/CloudFrontCName/DistributionId outputs.

    The configuration is fully validated before anything is declared.
    """
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        configuration: Dict[str, Any],
        provider: AwsProvider,
        variant: ApiVariant = ApiVariant.PLAIN,
    ) -> None:
        parsed = parse_configuration(construct_id, configuration, variant)
        validate_configuration(construct_id, parsed, variant)
        forwarded_headers = headers_to_forward(construct_id, parsed.forwarded_headers)
        error_page = error_page_path(construct_id, parsed) if variant == ApiVariant.SINGLE_PAGE_APP else None

        super().__init__(scope, construct_id)

        self.construct_id = construct_id
        self.configuration = parsed
        self.provider = provider
        self.variant = variant
        # Cast the domains to a list
        self.domains: Optional[List[str]] = flatten_domains(parsed.domain)

        label = "api" if variant == ApiVariant.PLAIN else "website"

        # "All URL query strings, HTTP headers, and cookies that you include in the cache key
        # (using a cache policy) are automatically included in origin requests."
        # https://docs.aws.amazon.com/AmazonCloudFront/latest/DeveloperGuide/controlling-origin-requests.html
        backend_origin_policy = cloudfront.OriginRequestPolicy(self, "BackendOriginPolicy",
            origin_request_policy_name=f"{provider.stack_name}-{construct_id}",
            comment=f"Origin request policy for the {construct_id} {label}.",
            cookie_behavior=cloudfront.OriginRequestCookieBehavior.all(),
            query_string_behavior=cloudfront.OriginRequestQueryStringBehavior.all(),
            header_behavior=cloudfront.OriginRequestHeaderBehavior.allow_list(*forwarded_headers),
        )
        backend_cache_policy = cloudfront.CachePolicy(self, "BackendCachePolicy",
            cache_policy_name=f"{provider.stack_name}-{construct_id}",
            comment=f"Cache policy for the {construct_id} {label}.",
            # For the backend we disable all caching by default
            default_ttl=Duration.seconds(0),
            # Authorization is an exception and must be allow-listed in the cache policy,
            # which is why the managed CACHING_DISABLED policy is not used
            header_behavior=cloudfront.CacheHeaderBehavior.allow_list("Authorization"),
        )

        certificate = None
        if parsed.certificate is not None:
            certificate = acm.Certificate.from_certificate_arn(self, "Certificate", parsed.certificate)

        request_function = self.create_request_function()

        comment = "website CDN" if variant == ApiVariant.PLAIN else "mono api CDN"
        self.distribution = cloudfront.Distribution(self, "CDN",
            comment=f"{provider.stack_name} {construct_id} {comment}",
            default_behavior=cloudfront.BehaviorOptions(
                origin=origins.HttpOrigin(
                    provider.function_url_domain(parsed.function_name),
                    # Function URLs only support HTTPS
                    protocol_policy=cloudfront.OriginProtocolPolicy.HTTPS_ONLY,
                ),
                # For a backend app we allow all methods
                allowed_methods=cloudfront.AllowedMethods.ALLOW_ALL,
                cache_policy=backend_cache_policy,
                viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
                origin_request_policy=backend_origin_policy,
                function_associations=[
                    cloudfront.FunctionAssociation(
                        function=request_function,
                        event_type=cloudfront.FunctionEventType.VIEWER_REQUEST,
                    ),
                ],
            ),
            error_responses=self.create_error_responses(error_page),
            # Enable http2 transfer for better performances
            http_version=cloudfront.HttpVersion.HTTP2,
            certificate=certificate,
            domain_names=self.domains,
        )

        api_domain = self.domains[0] if self.domains else self.distribution.distribution_domain_name
        self.domain_output = CfnOutput(self, "Domain",
            description="Api domain name.",
            value=api_domain,
        )
        self.cname_output = CfnOutput(self, "CloudFrontCName",
            description="CloudFront CNAME.",
            value=self.distribution.distribution_domain_name,
        )
        self.distribution_id_output = CfnOutput(self, "DistributionId",
            description="ID of the CloudFront distribution.",
            value=self.distribution.distribution_id,
        )

        logger.debug("Declared %s construct '%s' for function '%s'", variant.value, construct_id, parsed.function_name)

    def outputs(self) -> Dict[str, Callable[[], Optional[str]]]:
        if self.variant == ApiVariant.SINGLE_PAGE_APP:
            # Not exposed for single page apps yet
            return {}
        return {
            "url": self.get_url,
            "cname": self.get_cname,
        }

    def variables(self) -> Dict[str, Any]:
        if self.variant == ApiVariant.SINGLE_PAGE_APP:
            return {}
        domain = self.configuration.domain or self.distribution.distribution_domain_name
        return {
            "url": Fn.join("", ["https://", domain]),
            "cname": self.distribution.distribution_domain_name,
        }

    def get_url(self) -> Optional[str]:
        domain = self.get_domain()
        if domain is None:
            return None
        return f"https://{domain}"

    def get_domain(self) -> Optional[str]:
        return self.provider.get_stack_output(self.domain_output)

    def get_cname(self) -> Optional[str]:
        return self.provider.get_stack_output(self.cname_output)

    def get_distribution_id(self) -> Optional[str]:
        return self.provider.get_stack_output(self.distribution_id_output)

    def create_request_function(self) -> cloudfront.Function:
        if self.variant == ApiVariant.PLAIN:
            code = forward_host_function_code()
        else:
            additional_code = ""
            if self.configuration.redirect_to_main_domain:
                additional_code += redirect_to_main_domain(self.domains)
            code = single_page_app_function_code(additional_code)

        return cloudfront.Function(self, "RequestFunction",
            function_name=f"{self.provider.stack_name}-{self.provider.region}-{self.construct_id}-request",
            code=cloudfront.FunctionCode.from_inline(code),
        )

    def create_error_responses(self, error_page: Optional[str]) -> Optional[List[cloudfront.ErrorResponse]]:
        if error_page is None:
            return None
        # A 404 from the backend serves the error page, keeping the 404 status
        return [
            cloudfront.ErrorResponse(
                http_status=404,
                ttl=Duration.seconds(0),
                response_http_status=404,
                response_page_path=error_page,
            ),
        ]


def validate_configuration(construct_id: str, configuration: Configuration, variant: ApiVariant) -> None:
    if configuration.domain is not None and configuration.certificate is None:
        if variant == ApiVariant.PLAIN:
            message = (
                f"Invalid configuration in 'constructs.{construct_id}.certificate': "
                "if a domain is configured, then a certificate ARN must be configured as well."
            )
        else:
            message = (
                f"Invalid configuration for the mono api '{construct_id}': if a domain is configured, "
                "then a certificate ARN must be configured in the 'certificate' option.\n"
                "See https://github.com/getlift/lift/blob/master/docs/mono-api.md#custom-domain"
            )
        raise ServerlessError(message, INVALID_CONSTRUCT_CONFIGURATION)

    if configuration.certificate is not None and configuration.domain is None:
        raise ServerlessError(
            f"Invalid configuration in 'constructs.{construct_id}.domain': "
            "if a certificate ARN is configured, then a domain must be configured as well.",
            INVALID_CONSTRUCT_CONFIGURATION,
        )

    if configuration.function_name is None:
        reason = "functionName is mandatory." if variant == ApiVariant.PLAIN else "the function's name is mandatory."
        raise ServerlessError(
            f"Invalid configuration in 'constructs.{construct_id}.functionName': {reason}",
            INVALID_CONSTRUCT_CONFIGURATION,
        )


def error_page_path(construct_id: str, configuration: Configuration) -> Optional[str]:
    error_page = configuration.error_page
    if error_page is None:
        return None
    if error_page.startswith("./") or error_page.startswith("../"):
        raise ServerlessError(
            f"The 'errorPage' option of the '{construct_id}' mono api cannot start with './' or '../'. "
            "(it cannot be a relative path).",
            INVALID_CONSTRUCT_CONFIGURATION,
        )
    if not error_page.startswith("/"):
        error_page = f"/{error_page}"
    return error_page


def create_construct(scope: Construct, construct_id: str, definition: Dict[str, Any], provider: AwsProvider) -> MonoApi:
    """
    Builds the construct matching the `type` of a definition from the `constructs` section.
    """
    construct_type = definition.get("type")
    try:
        variant = ApiVariant(construct_type)
    except ValueError:
        supported = ", ".join(f"'{v.value}'" for v in ApiVariant)
        raise ServerlessError(
            f"Invalid configuration in 'constructs.{construct_id}.type': "
            f"unknown construct type '{construct_type}' (supported types are {supported}).",
            INVALID_CONSTRUCT_CONFIGURATION,
        ) from None
    return MonoApi(scope, construct_id, definition, provider, variant=variant)
