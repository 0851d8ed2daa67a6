import aws_cdk.aws_iam as iam
from constructs import Construct

import constants


class AutomationRole(Construct):
    def __init__(self, scope: Construct, id_: str, *, assumed_role_arn: str):
        super().__init__(scope, id_)

        self.iam_role = iam.Role(
            self,
            "IAMRole",
            role_name=constants.ROLE_NAME,
            assumed_by=iam.ArnPrincipal(assumed_role_arn),
        )
        self.iam_role.add_to_policy(
            iam.PolicyStatement(
                actions=[constants.ROUTE_TABLE_READ_ACTION],
                resources=["*"],
            )
        )
