import logging

import aws_cdk as cdk
from config import get_config
from stacks.service_stack import ServiceStack

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

app = cdk.App()
config = get_config(app)

# =================================================================
# SERVICE STACK
# =================================================================
# Functions and the CloudFront constructs fronting them, named '<service>-<stage>'.
service_env = cdk.Environment(account=config.account, region=config.region)
service_stack = ServiceStack(
    app, config.stack_name,
    config=config,
    env=service_env
)

if not config.constructs:
    print("⏭️ No constructs configured: only the functions will be deployed")

app.synth()
