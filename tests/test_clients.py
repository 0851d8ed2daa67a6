from unittest.mock import Mock

from operations import clients


def test_get_automation_role_session_assumes_automation_role():
    sts_client = Mock()
    sts_client.assume_role.return_value = {
        "Credentials": {
            "AccessKeyId": "AKIAEXAMPLE",
            "SecretAccessKey": "secret",
            "SessionToken": "token",
        }
    }

    session = clients.get_automation_role_session(sts_client, "111111111111")

    sts_client.assume_role.assert_called_once_with(
        RoleArn="arn:aws:iam::111111111111:role/TavernAutomationRole",
        RoleSessionName="TavernAutomation",
    )
    credentials = session.get_credentials()
    assert credentials.access_key == "AKIAEXAMPLE"
    assert credentials.secret_key == "secret"
    assert credentials.token == "token"
