"""
AWS Inspector helpers: profile discovery, region catalog, CLI wrapper and finding retrieval.
"""

from inspector.aws_cli import AwsCli, AwsCliError, is_inspector_available
from inspector.findings import get_inspector_findings
from inspector.profiles import get_aws_profiles
from inspector.regions import get_aws_regions, get_default_region, order_regions, strip_default_label

__all__ = [
    "AwsCli",
    "AwsCliError",
    "is_inspector_available",
    "get_inspector_findings",
    "get_aws_profiles",
    "get_aws_regions",
    "get_default_region",
    "order_regions",
    "strip_default_label",
]
