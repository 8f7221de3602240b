# inspector/findings.py
"""
Inspector finding retrieval.

Each scenario runs two list-findings queries, CRITICAL first and HIGH second,
one after the other. Results are concatenated in that order.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from config import INSPECTOR_MAX_RESULTS
from inspector.aws_cli import AwsCli, AwsCliError
from models import SEVERITIES, FindingScenario, get_scenario

logger = logging.getLogger(__name__)


def list_findings_command(scenario: FindingScenario, severity: str) -> List[str]:
    criteria = json.dumps(scenario.filter_criteria(severity), separators=(",", ":"))
    return [
        "inspector2", "list-findings",
        "--filter-criteria", criteria,
        "--max-results", str(INSPECTOR_MAX_RESULTS),
    ]


def _extract_findings(response: Any) -> List[Dict[str, Any]]:
    if isinstance(response, dict) and isinstance(response.get("findings"), list):
        return response["findings"]
    return []


def get_inspector_findings(cli: AwsCli, profile: Optional[str], region: str,
                           scenario_key: str) -> List[Dict[str, Any]]:
    """
    Return CRITICAL then HIGH findings matching the scenario.

    Raises ValueError for an unknown scenario and AwsCliError when a query fails.
    """
    scenario = get_scenario(scenario_key)
    logger.info("Retrieving findings for: %s", scenario.title)

    all_findings: List[Dict[str, Any]] = []
    for severity in SEVERITIES:
        logger.info("Retrieving %s severity findings...", severity.capitalize())
        try:
            response = cli.run(list_findings_command(scenario, severity), profile=profile, region=region)
        except AwsCliError as e:
            logger.error("Error retrieving Inspector findings: %s", e)
            raise
        found = _extract_findings(response)
        logger.info("Found %d %s severity findings.", len(found), severity.capitalize())
        all_findings.extend(found)

    logger.info("Found a total of %d matching findings.", len(all_findings))
    return all_findings
