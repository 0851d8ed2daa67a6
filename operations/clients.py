import boto3
from aws_lambda_powertools import Logger
from mypy_boto3_sts import STSClient

import constants

logger = Logger(service=constants.APP_NAME, child=True)


def get_session(profile_name: str) -> boto3.session.Session:
    return boto3.session.Session(profile_name=profile_name)


def get_automation_role_session(
    sts_client: STSClient, account: str
) -> boto3.session.Session:
    """Returns a session holding automation role credentials for the account.

    The automation role is deployed to every account by the stack set and trusts
    the organization account principal the STS client is authenticated as.
    """
    automation_role_arn = f"arn:aws:iam::{account}:role/{constants.ROLE_NAME}"
    logger.debug("Assuming automation role", role_arn=automation_role_arn)
    response = sts_client.assume_role(
        RoleArn=automation_role_arn,
        RoleSessionName=constants.APP_NAME,
    )
    credentials = response["Credentials"]

    # boto3 sessions are not thread-safe, each account gets its own.
    return boto3.session.Session(
        aws_access_key_id=credentials["AccessKeyId"],
        aws_secret_access_key=credentials["SecretAccessKey"],
        aws_session_token=credentials["SessionToken"],
    )
