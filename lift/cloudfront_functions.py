"""
JavaScript bodies of the CloudFront Functions attached to the distributions.

This code runs in the CloudFront Functions runtime (ECMAScript 5.1, no `let`,
no arrow functions), never in Python.
"""
from string import Template
from typing import List, Optional

# Extensions served as-is by a single page app.
# Taken from: https://docs.aws.amazon.com/amplify/latest/userguide/redirects.html#redirects-for-single-page-web-apps-spa
STATIC_FILE_EXTENSIONS = (
    "css",
    "gif",
    "ico",
    "jpg",
    "jpeg",
    "js",
    "png",
    "txt",
    "svg",
    "woff",
    "woff2",
    "ttf",
    "map",
    "json",
)

# CloudFront does not forward the original `Host` header, the backend reads it from `X-Forwarded-Host`.
# See https://developer.mozilla.org/en-US/docs/Web/HTTP/Headers/X-Forwarded-Host
FORWARD_HOST_CODE = """function handler(event) {
    var request = event.request;
    request.headers["x-forwarded-host"] = request.headers["host"];
    return request;
}"""

SINGLE_PAGE_APP_CODE = Template("""var REDIRECT_REGEX = /^[^.]+$$|\\.(?!($extensions)$$)([^.]+$$)/;

function handler(event) {
    var uri = event.request.uri;
    var request = event.request;
    var isUriToRedirect = REDIRECT_REGEX.test(uri);

    if (isUriToRedirect) {
        request.uri = "/index.html";
    }$additional_code

    return event.request;
}""")

REDIRECT_TO_MAIN_DOMAIN_CODE = Template("""
    if (request.headers["host"].value !== "$main_domain") {
        return {
            statusCode: 301,
            statusDescription: "Moved Permanently",
            headers: {
                location: {
                    value: "https://$main_domain" + request.uri
                }
            }
        };
    }""")


def forward_host_function_code() -> str:
    return FORWARD_HOST_CODE


def redirect_to_main_domain(domains: Optional[List[str]]) -> str:
    """
    Redirects every secondary domain to the first one. Nothing to do with less than 2 domains.
    """
    if domains is None or len(domains) < 2:
        return ""
    return REDIRECT_TO_MAIN_DOMAIN_CODE.substitute(main_domain=domains[0])


def single_page_app_function_code(additional_code: str = "") -> str:
    return SINGLE_PAGE_APP_CODE.substitute(
        extensions="|".join(STATIC_FILE_EXTENSIONS),
        additional_code=additional_code,
    )
