import aws_cdk as cdk

import constants
from service.service_stack import ServiceStack
from service.stack_set_config import StackSetConfig

app = cdk.App()

# cdk synth -c OrgAccount=<account> -c RoleName=<role> -c SSOUser=<user> \
#   > tavernauto.yaml
ServiceStack(
    app,
    f"{constants.APP_NAME}-StackSet",
    config=StackSetConfig.from_context(app.node),
)

app.synth()
