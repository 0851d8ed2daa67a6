APP_NAME = "TavernAutomation"

ROLE_NAME = "TavernAutomationRole"
ROUTE_TABLE_READ_ACTION = "ec2:DescribeRouteTables"

# CDK context keys supplied with `cdk synth -c <key>=<value>`.
ORG_ACCOUNT_CONTEXT_KEY = "OrgAccount"
ROLE_NAME_CONTEXT_KEY = "RoleName"
SSO_USER_CONTEXT_KEY = "SSOUser"

STACK_SET_NAME = "TavernAutomations"
STACK_SET_REGIONS = ["us-east-1"]
STACK_SET_MAX_CONCURRENT_PERCENTAGE = 100
STACK_SET_FAILURE_TOLERANCE_COUNT = 5
TEMPLATE_FILE_NAME = "tavernauto.yaml"

AWS_PROFILE_NAME = "tavern-automation"
ROUTES_FILE_NAME = "routes.json"
INTERNET_GATEWAY_ID_PREFIX = "igw-"
AUDIT_MAX_WORKERS = 8
