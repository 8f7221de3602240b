# models.py
"""
Data models used by the reporter.

- FindingScenario describes one selectable severity/status filter combination.
- ValidationResult is what prompt validators hand back to the prompter.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

SEVERITIES = ("CRITICAL", "HIGH")


@dataclass(frozen=True)
class FindingScenario:
    """
    A predefined inspector2 filter combination.

    Fields:
    - key: the number the operator types ("1", "2", "3")
    - label: short name used in the report file name
    - title: human-readable menu text
    - description: short explanation shown next to the title in the menu
    - status: findingStatus value (ACTIVE or CLOSED)
    - exploit_available: restrict to findings with a known exploit
    """
    key: str
    label: str
    title: str
    description: str
    status: str
    exploit_available: bool = False

    def filter_criteria(self, severity: str) -> Dict[str, List[Dict[str, str]]]:
        criteria = {
            "findingStatus": [{"comparison": "EQUALS", "value": self.status}],
            "severity": [{"comparison": "EQUALS", "value": severity}],
        }
        if self.exploit_available:
            criteria["exploitAvailable"] = [{"comparison": "EQUALS", "value": "YES"}]
        return criteria


SCENARIOS: Dict[str, FindingScenario] = {
    s.key: s for s in (
        FindingScenario(
            key="1",
            label="priority_active",
            title="Priority active weaknesses",
            description="Critical/High severity with exploit available",
            status="ACTIVE",
            exploit_available=True,
        ),
        FindingScenario(
            key="2",
            label="all_active",
            title="All active weaknesses",
            description="Critical/High severity",
            status="ACTIVE",
        ),
        FindingScenario(
            key="3",
            label="all_closed",
            title="All closed weaknesses",
            description="Critical/High severity",
            status="CLOSED",
        ),
    )
}


def get_scenario(key: str) -> FindingScenario:
    """
    Look up a scenario by its key or label. Unknown values are a programming error.
    """
    if key in SCENARIOS:
        return SCENARIOS[key]
    for scenario in SCENARIOS.values():
        if scenario.label == key:
            return scenario
    raise ValueError(f"Invalid finding type: {key!r}")


@dataclass
class ValidationResult:
    valid: bool
    value: Any = None
    message: Optional[str] = None
