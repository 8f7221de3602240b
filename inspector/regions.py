# inspector/regions.py
"""
Region catalog and default-region resolution.

- get_aws_regions asks EC2 for the region list and falls back to a fixed list.
- get_default_region checks AWS_REGION, then the profile's configured region.
"""

import logging
import os
from typing import List, Mapping, Optional

import botocore.session
from botocore.exceptions import BotoCoreError

from config import AWS_REGION_ENV_VAR, DEFAULT_REGION_LABEL, FALLBACK_REGIONS
from inspector.aws_cli import AwsCli, AwsCliError

logger = logging.getLogger(__name__)

DESCRIBE_REGIONS = ["ec2", "describe-regions", "--query", "Regions[].RegionName", "--output", "json"]


def _is_region_list(data) -> bool:
    return isinstance(data, list) and bool(data) and all(isinstance(r, str) and r for r in data)


def get_aws_regions(cli: AwsCli, profile: Optional[str]) -> List[str]:
    """
    Return region names visible to the profile, or the fallback list on any failure.
    """
    try:
        data = cli.run(DESCRIBE_REGIONS, profile=profile)
    except AwsCliError as e:
        logger.info("Could not fetch regions (%s). Using default region list.", e)
        return list(FALLBACK_REGIONS)

    if not _is_region_list(data):
        logger.info("Unexpected describe-regions output. Using default region list.")
        return list(FALLBACK_REGIONS)

    logger.info("Fetched %d regions from EC2", len(data))
    return list(data)


def get_default_region(profile: Optional[str],
                       environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Resolve the default region: environment override, else the profile's configured region.
    """
    environ = os.environ if environ is None else environ
    env_region = environ.get(AWS_REGION_ENV_VAR)
    if env_region:
        return env_region

    try:
        session = botocore.session.Session(profile=profile)
        region = session.get_scoped_config().get("region")
    except BotoCoreError as e:
        logger.debug("No configured region for profile %s: %s", profile, e)
        return None
    return region.strip() if region and region.strip() else None


def order_regions(regions: List[str], default_region: Optional[str]) -> List[str]:
    """
    Move the default region to the front and label it. Other regions keep their order.
    """
    ordered = list(regions)
    if default_region and default_region in ordered:
        ordered.remove(default_region)
        ordered.insert(0, default_region + DEFAULT_REGION_LABEL)
    return ordered


def strip_default_label(region: str) -> str:
    if region.endswith(DEFAULT_REGION_LABEL):
        return region[: -len(DEFAULT_REGION_LABEL)]
    return region
