import pytest

from lift.errors import ServerlessError
from lift.headers import DEFAULT_FORWARDED_HEADERS, headers_to_forward


def test_default_headers_when_none_configured():
    assert headers_to_forward("backend", None) == [
        "Accept",
        "Accept-Language",
        "Content-Type",
        "Origin",
        "Referer",
        "User-Agent",
        "X-Requested-With",
        "X-Forwarded-Host",
    ]


def test_default_headers_when_only_authorization_configured():
    assert headers_to_forward("backend", ["Authorization", "Authorization"]) == list(DEFAULT_FORWARDED_HEADERS)


def test_custom_headers_are_kept_in_order():
    headers = headers_to_forward("backend", ["X-My-Custom-Header", "X-My-Other-Custom-Header"])

    assert headers == ["X-My-Custom-Header", "X-My-Other-Custom-Header"]


@pytest.mark.parametrize("configured", [
    ["Authorization", "X-My-Custom-Header"],
    ["X-My-Custom-Header", "Authorization", "Authorization"],
    ["authorization", "X-My-Custom-Header"],
])
def test_authorization_is_removed(configured):
    assert headers_to_forward("backend", configured) == ["X-My-Custom-Header"]


@pytest.mark.parametrize("configured", [["Host"], ["X-My-Custom-Header", "Host"], ["host"]])
def test_host_cannot_be_forwarded(configured):
    with pytest.raises(ServerlessError) as error:
        headers_to_forward("backend", configured)

    assert error.value.code == "LIFT_INVALID_CONSTRUCT_CONFIGURATION"
    assert str(error.value) == (
        "Invalid value in 'constructs.backend.forwardedHeaders': the 'Host' header cannot be forwarded "
        "(this is an API Gateway limitation). Use the 'X-Forwarded-Host' header in your code instead "
        "(it contains the value of the original 'Host' header)."
    )


def test_at_most_10_headers():
    with pytest.raises(ServerlessError) as error:
        headers_to_forward("backend", [str(i) for i in range(1, 12)])

    assert str(error.value) == (
        "Invalid value in 'constructs.backend.forwardedHeaders': 11 headers are configured "
        "but only 10 headers can be forwarded (this is an CloudFront limitation)."
    )


def test_limit_applies_after_removing_authorization():
    headers = [str(i) for i in range(1, 11)] + ["Authorization"]

    assert headers_to_forward("backend", headers) == [str(i) for i in range(1, 11)]
