from typing import List, Optional

from lift.errors import INVALID_CONSTRUCT_CONFIGURATION, ServerlessError

# CloudFront limit on the number of headers in an origin request policy
MAX_FORWARDED_HEADERS = 10

# We forward everything except:
# - `Host` because the Lambda Function URL uses it to route the request
# - `Authorization` because it must be configured on the cache policy
#   (see https://aws.amazon.com/premiumsupport/knowledge-center/cloudfront-authorization-header/)
DEFAULT_FORWARDED_HEADERS = (
    "Accept",
    "Accept-Language",
    "Content-Type",
    "Origin",
    "Referer",
    "User-Agent",
    "X-Requested-With",
    # This header is set by our CloudFront Function
    "X-Forwarded-Host",
)


def headers_to_forward(construct_id: str, forwarded_headers: Optional[List[str]]) -> List[str]:
    """
    Headers allow-listed in the origin request policy of the backend.
    """
    headers = list(forwarded_headers or [])

    if any(header.lower() == "host" for header in headers):
        raise ServerlessError(
            f"Invalid value in 'constructs.{construct_id}.forwardedHeaders': the 'Host' header cannot be forwarded "
            "(this is an API Gateway limitation). Use the 'X-Forwarded-Host' header in your code instead "
            "(it contains the value of the original 'Host' header).",
            INVALID_CONSTRUCT_CONFIGURATION,
        )

    # `Authorization` cannot be forwarded via this setting, it is always forwarded through the cache policy
    headers = [header for header in headers if header.lower() != "authorization"]

    if not headers:
        return list(DEFAULT_FORWARDED_HEADERS)

    if len(headers) > MAX_FORWARDED_HEADERS:
        raise ServerlessError(
            f"Invalid value in 'constructs.{construct_id}.forwardedHeaders': {len(headers)} headers are configured "
            f"but only {MAX_FORWARDED_HEADERS} headers can be forwarded (this is an CloudFront limitation).",
            INVALID_CONSTRUCT_CONFIGURATION,
        )

    return headers
