import dataclasses
from typing import Optional

from aws_lambda_powertools import Logger
from mypy_boto3_cloudformation import CloudFormationClient
from mypy_boto3_organizations import OrganizationsClient

import constants
from service.stack_set_config import ConfigurationError

logger = Logger(service=constants.APP_NAME, child=True)


@dataclasses.dataclass(frozen=True)
class StackSetDeployment:
    stack_set_name: str = constants.STACK_SET_NAME
    regions: tuple[str, ...] = tuple(constants.STACK_SET_REGIONS)
    # Empty means the organization root, i.e. every account.
    organizational_unit_ids: tuple[str, ...] = ()
    max_concurrent_percentage: int = constants.STACK_SET_MAX_CONCURRENT_PERCENTAGE
    failure_tolerance_count: int = constants.STACK_SET_FAILURE_TOLERANCE_COUNT


def get_organization_root_id(organizations_client: OrganizationsClient) -> str:
    response = organizations_client.list_roots()
    roots = response["Roots"]
    if not roots:
        raise ConfigurationError(
            "Organization has no root", config_key="OrganizationalUnitIds"
        )
    return roots[0]["Id"]


def update_stack_set(
    cloudformation_client: CloudFormationClient,
    template_body: str,
    deployment: StackSetDeployment,
    *,
    organizations_client: Optional[OrganizationsClient] = None,
) -> str:
    """Updates the stack set instances with the synthesized template.

    The template declares a named IAM role, hence CAPABILITY_NAMED_IAM.
    Returns the stack set operation ID.
    """
    if not template_body.strip():
        raise ConfigurationError("Template body is empty", config_key="TemplateBody")

    organizational_unit_ids = list(deployment.organizational_unit_ids)
    if not organizational_unit_ids:
        if organizations_client is None:
            raise ConfigurationError(
                "Organizational unit IDs or an Organizations client are required",
                config_key="OrganizationalUnitIds",
            )
        organizational_unit_ids = [get_organization_root_id(organizations_client)]

    logger.info(
        "Updating stack set",
        stack_set_name=deployment.stack_set_name,
        organizational_unit_ids=organizational_unit_ids,
        regions=list(deployment.regions),
    )
    response = cloudformation_client.update_stack_set(
        StackSetName=deployment.stack_set_name,
        TemplateBody=template_body,
        DeploymentTargets={"OrganizationalUnitIds": organizational_unit_ids},
        Regions=list(deployment.regions),
        OperationPreferences={
            "MaxConcurrentPercentage": deployment.max_concurrent_percentage,
            "FailureToleranceCount": deployment.failure_tolerance_count,
        },
        Capabilities=["CAPABILITY_NAMED_IAM"],
    )
    operation_id = response["OperationId"]
    logger.info("Stack set update started", operation_id=operation_id)

    return operation_id
