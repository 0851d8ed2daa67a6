import argparse
import pathlib
import sys
from typing import Optional, Sequence

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

import constants
from operations import clients, internet_routes, stack_set_deployment
from service.stack_set_config import ConfigurationError

logger = Logger(service=constants.APP_NAME)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tavern-automation",
        description="Operate the organization wide automation role",
    )
    parser.add_argument(
        "--profile",
        default=constants.AWS_PROFILE_NAME,
        help="Shared config profile of the organization account",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    update_cmd = subparsers.add_parser(
        "update-stack-set", help="Deploy the synthesized template to the organization"
    )
    update_cmd.add_argument(
        "--template",
        type=pathlib.Path,
        default=pathlib.Path(constants.TEMPLATE_FILE_NAME),
    )
    update_cmd.add_argument("--stack-set-name", default=constants.STACK_SET_NAME)
    update_cmd.add_argument(
        "--region",
        dest="regions",
        action="append",
        help="Stack instance region, repeatable (default: us-east-1)",
    )
    update_cmd.add_argument(
        "--organizational-unit-id",
        dest="organizational_unit_ids",
        action="append",
        help="Deployment target, repeatable (default: organization root)",
    )
    update_cmd.add_argument(
        "--max-concurrent-percentage",
        type=int,
        default=constants.STACK_SET_MAX_CONCURRENT_PERCENTAGE,
    )
    update_cmd.add_argument(
        "--failure-tolerance-count",
        type=int,
        default=constants.STACK_SET_FAILURE_TOLERANCE_COUNT,
    )

    audit_cmd = subparsers.add_parser(
        "audit-routes", help="Report routes to internet gateways in every account"
    )
    audit_cmd.add_argument(
        "--output",
        type=pathlib.Path,
        default=pathlib.Path(constants.ROUTES_FILE_NAME),
    )
    audit_cmd.add_argument(
        "--max-workers", type=_positive_int, default=constants.AUDIT_MAX_WORKERS
    )

    return parser


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        if args.command == "update-stack-set":
            _update_stack_set(args)
        else:
            _audit_routes(args)
    except ConfigurationError as error:
        logger.error(
            "Invalid configuration", config_key=error.config_key, error=str(error)
        )
        return 1
    except (ClientError, BotoCoreError) as error:
        logger.error("AWS request failed", error=str(error))
        return 1
    return 0


def _update_stack_set(args: argparse.Namespace) -> None:
    if not args.template.is_file():
        raise ConfigurationError(
            f"Template {args.template} does not exist, run `cdk synth` first",
            config_key="TemplateBody",
        )
    deployment = stack_set_deployment.StackSetDeployment(
        stack_set_name=args.stack_set_name,
        regions=tuple(args.regions or constants.STACK_SET_REGIONS),
        organizational_unit_ids=tuple(args.organizational_unit_ids or ()),
        max_concurrent_percentage=args.max_concurrent_percentage,
        failure_tolerance_count=args.failure_tolerance_count,
    )
    session = clients.get_session(args.profile)
    stack_set_deployment.update_stack_set(
        session.client("cloudformation"),
        args.template.read_text(encoding="utf-8"),
        deployment,
        organizations_client=session.client("organizations"),
    )


def _audit_routes(args: argparse.Namespace) -> None:
    session = clients.get_session(args.profile)
    routes = internet_routes.audit_organization(session, max_workers=args.max_workers)
    internet_routes.write_routes(routes, args.output)
    logger.info("Saved internet routes", count=len(routes), path=str(args.output))


if __name__ == "__main__":
    sys.exit(main())
