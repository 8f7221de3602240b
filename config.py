"""
Central configuration and tunable constants.

- The AWS CLI executable and its output ceiling live here.
- The default region can be overridden with the AWS_REGION environment variable.
- Fallback regions are used when the live region query fails.
"""

AWS_CLI_EXECUTABLE = "aws"
AWS_REGION_ENV_VAR = "AWS_REGION"

# Captured stdout above this size is treated as a failed command
AWS_CLI_MAX_OUTPUT_BYTES = 10 * 1024 * 1024

# Page size for inspector2 list-findings
INSPECTOR_MAX_RESULTS = 100

FALLBACK_REGIONS = [
    "us-east-1", "us-east-2", "us-west-1", "us-west-2",
    "ap-south-1", "ap-northeast-3", "ap-northeast-2", "ap-southeast-1",
    "ap-southeast-2", "ap-northeast-1", "ca-central-1", "eu-central-1",
    "eu-west-1", "eu-west-2", "eu-west-3", "eu-north-1",
    "sa-east-1",
]

DEFAULT_REGION_LABEL = " (default)"

DEFAULT_REPORT_DIR = "."
REPORT_FILENAME_TEMPLATE = "aws_inspector_{label}_findings_{timestamp}.csv"

MISSING_VALUE = "-"
