"""Organization wide audit of routes to internet gateways.

Runs from the organization account: lists every member account, assumes the
automation role deployed by the stack set, and describes the route tables of
every enabled region looking for routes targeting an internet gateway.
"""
import concurrent.futures
import dataclasses
import json
import pathlib
from typing import Any, Iterator, Optional, Sequence

import boto3
from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from mypy_boto3_ec2 import EC2Client
from mypy_boto3_organizations import OrganizationsClient
from mypy_boto3_sts import STSClient

import constants
from operations import clients

logger = Logger(service=constants.APP_NAME, child=True)


@dataclasses.dataclass(frozen=True)
class InternetRoute:
    """A route to an internet gateway.

    An instance holding only the account marks an account whose route tables
    could not be described.
    """

    account: str
    # Empty for accounts whose route tables could not be described.
    region: str = ""
    vpc: Optional[str] = None
    route_table: Optional[str] = None
    destination_cidr: Optional[str] = None
    internet_gateway: Optional[str] = None

    def to_dict(self) -> dict[str, Optional[str]]:
        return {
            "Account": self.account,
            "Region": self.region,
            "Vpc": self.vpc,
            "RouteTable": self.route_table,
            "DestinationCidr": self.destination_cidr,
            "InternetGateway": self.internet_gateway,
        }


def list_enabled_regions(ec2_client: EC2Client) -> list[str]:
    # Only regions enabled in the calling account are returned.
    response = ec2_client.describe_regions()
    return [region["RegionName"] for region in response["Regions"]]


def list_accounts(organizations_client: OrganizationsClient) -> list[str]:
    accounts = []
    paginator = organizations_client.get_paginator("list_accounts")
    for page in paginator.paginate():
        accounts.extend(account["Id"] for account in page["Accounts"])
    return accounts


def find_internet_routes(
    ec2_client: EC2Client, account: str, region: str
) -> Iterator[InternetRoute]:
    paginator = ec2_client.get_paginator("describe_route_tables")
    for page in paginator.paginate():
        for route_table in page["RouteTables"]:
            for route in route_table.get("Routes", []):
                if not _is_internet_route(route):
                    continue
                internet_route = InternetRoute(
                    account=account,
                    region=region,
                    vpc=route_table.get("VpcId"),
                    route_table=route_table.get("RouteTableId"),
                    destination_cidr=route.get("DestinationCidrBlock"),
                    internet_gateway=route["GatewayId"],
                )
                logger.info("Found internet route", **internet_route.to_dict())
                yield internet_route


def audit_account(
    sts_client: STSClient, account: str, regions: Sequence[str]
) -> list[InternetRoute]:
    routes: list[InternetRoute] = []
    try:
        session = clients.get_automation_role_session(sts_client, account)
        for region in regions:
            ec2_client = session.client("ec2", region_name=region)
            routes.extend(find_internet_routes(ec2_client, account, region))
    except (ClientError, BotoCoreError) as error:
        logger.warning(
            "Unable to retrieve route tables", account=account, error=str(error)
        )
        routes.append(InternetRoute(account=account))
    return routes


def audit_organization(
    session: boto3.session.Session,
    *,
    max_workers: int = constants.AUDIT_MAX_WORKERS,
) -> list[InternetRoute]:
    organizations_client = session.client("organizations")
    sts_client = session.client("sts")
    regions = list_enabled_regions(session.client("ec2"))
    logger.info("Listing enabled regions", regions=regions)

    accounts = list_accounts(organizations_client)
    logger.info("Listing organization accounts", accounts=accounts)

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = executor.map(
            lambda account: audit_account(sts_client, account, regions), accounts
        )
        routes = [route for account_routes in results for route in account_routes]

    return routes


def write_routes(routes: Sequence[InternetRoute], path: pathlib.Path) -> None:
    path.write_text(
        json.dumps([route.to_dict() for route in routes], indent="\t"),
        encoding="utf-8",
    )


def _is_internet_route(route: Any) -> bool:
    gateway_id = route.get("GatewayId")
    return gateway_id is not None and constants.INTERNET_GATEWAY_ID_PREFIX in gateway_id
