import json
from typing import Any, Dict

def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Minimal backend behind the mono api distribution.
    Reports the domain the visitor used, which CloudFront passes in X-Forwarded-Host.
    """
    headers = {k.lower(): v for k, v in event.get('headers', {}).items()}
    request_context = event.get('requestContext', {}).get('http', {})

    print(f"Request {request_context.get('method')} {event.get('rawPath')} for host {headers.get('x-forwarded-host')}")

    return {
        "statusCode": 200,
        "headers": {
            "Content-Type": "application/json"
        },
        "body": json.dumps({
            "host": headers.get('x-forwarded-host'),
            "path": event.get('rawPath', '/'),
            "authorized": 'authorization' in headers
        })
    }
