from unittest.mock import Mock

import pytest

from operations.stack_set_deployment import StackSetDeployment, update_stack_set
from service.stack_set_config import ConfigurationError

TEMPLATE_BODY = "Resources:\n  AutomationRole: {}\n"


def _cloudformation_client():
    client = Mock()
    client.update_stack_set.return_value = {"OperationId": "op-1"}
    return client


def test_update_stack_set_targets_organization_root():
    cloudformation_client = _cloudformation_client()
    organizations_client = Mock()
    organizations_client.list_roots.return_value = {"Roots": [{"Id": "r-ab12"}]}

    operation_id = update_stack_set(
        cloudformation_client,
        TEMPLATE_BODY,
        StackSetDeployment(),
        organizations_client=organizations_client,
    )

    assert operation_id == "op-1"
    cloudformation_client.update_stack_set.assert_called_once_with(
        StackSetName="TavernAutomations",
        TemplateBody=TEMPLATE_BODY,
        DeploymentTargets={"OrganizationalUnitIds": ["r-ab12"]},
        Regions=["us-east-1"],
        OperationPreferences={
            "MaxConcurrentPercentage": 100,
            "FailureToleranceCount": 5,
        },
        Capabilities=["CAPABILITY_NAMED_IAM"],
    )


def test_update_stack_set_uses_given_organizational_units():
    cloudformation_client = _cloudformation_client()
    organizations_client = Mock()
    deployment = StackSetDeployment(
        organizational_unit_ids=("ou-ab12-11111111",), regions=("eu-west-1", "us-east-1")
    )

    update_stack_set(
        cloudformation_client,
        TEMPLATE_BODY,
        deployment,
        organizations_client=organizations_client,
    )

    organizations_client.list_roots.assert_not_called()
    kwargs = cloudformation_client.update_stack_set.call_args.kwargs
    assert kwargs["DeploymentTargets"] == {"OrganizationalUnitIds": ["ou-ab12-11111111"]}
    assert kwargs["Regions"] == ["eu-west-1", "us-east-1"]


def test_update_stack_set_rejects_empty_template():
    cloudformation_client = _cloudformation_client()

    with pytest.raises(ConfigurationError):
        update_stack_set(
            cloudformation_client,
            "  \n",
            StackSetDeployment(organizational_unit_ids=("r-ab12",)),
        )
    cloudformation_client.update_stack_set.assert_not_called()


def test_update_stack_set_requires_targets():
    with pytest.raises(ConfigurationError) as excinfo:
        update_stack_set(_cloudformation_client(), TEMPLATE_BODY, StackSetDeployment())
    assert excinfo.value.config_key == "OrganizationalUnitIds"
