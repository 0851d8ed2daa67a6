from typing import Any

import aws_cdk as cdk
from constructs import Construct

from service.automation_role import AutomationRole
from service.stack_set_config import StackSetConfig


class ServiceStack(cdk.Stack):
    def __init__(
        self, scope: Construct, id_: str, *, config: StackSetConfig, **kwargs: Any
    ):
        # Stack set target accounts are not CDK bootstrapped, hence the template
        # must not check the bootstrap version SSM parameter.
        kwargs.setdefault(
            "synthesizer",
            cdk.DefaultStackSynthesizer(generate_bootstrap_version_rule=False),
        )
        super().__init__(scope, id_, **kwargs)

        automation_role = AutomationRole(
            self, "AutomationRole", assumed_role_arn=config.assumed_role_arn
        )

        cdk.CfnOutput(
            self, "AutomationRoleName", value=automation_role.iam_role.role_name
        )
        cdk.CfnOutput(
            self, "AutomationRoleARN", value=automation_role.iam_role.role_arn
        )
