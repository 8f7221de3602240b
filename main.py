# main.py
"""
CLI entrypoint for the AWS Inspector vulnerability report generator.

- Walks the operator through profile, region and finding-type selection.
- Retrieves Critical/High inspector2 findings through the AWS CLI.
- Writes a timestamped CSV report and prints a colourful summary.
"""

import argparse
import logging
import sys
from typing import List, Optional

from config import DEFAULT_REPORT_DIR
from inspector.aws_cli import AwsCli, is_inspector_available
from inspector.findings import get_inspector_findings
from inspector.profiles import get_aws_profiles
from inspector.regions import get_aws_regions, get_default_region, order_regions, strip_default_label
from models import SCENARIOS, get_scenario
from prompt import Prompter, profile_validator, region_validator, scenario_validator
from utils import findings_to_csv, print_summary_and_report_path, save_csv_report

logger = logging.getLogger("inspector_reporter")


def _preset_or_ask(prompter: Prompter, preset: Optional[str], title: str, menu, question: str,
                   options, validator, what: str):
    """
    Use a value given on the command line when it is one of the options, otherwise
    show the menu and prompt.
    """
    if preset is not None:
        if options is None or preset in [strip_default_label(o) for o in options]:
            return preset
        prompter.console.print(f"{what} '{preset}' is not available; please choose from the list.")
    prompter.show_options(title, menu)
    return prompter.ask(question, options, validator)


def run_report(cli: AwsCli, prompter: Prompter, report_dir: str = DEFAULT_REPORT_DIR,
               profile: Optional[str] = None, region: Optional[str] = None,
               scenario: Optional[str] = None) -> Optional[str]:
    """
    Run one interactive report session. Returns the written report path, or None
    when the session ended without a file.
    """
    console = prompter.console
    console.print("===== AWS Inspector Vulnerability Report Generator =====\n")

    logger.info("Looking for AWS profiles...")
    profiles = get_aws_profiles()
    if not profiles:
        console.print("No AWS profiles found. Please configure your AWS CLI first.")
        return None

    selected_profile = _preset_or_ask(
        prompter, profile, "Available AWS profiles:", profiles,
        "\nSelect a profile (enter number): ", profiles, profile_validator, "Profile"
    )
    console.print(f"\nUsing AWS profile: {selected_profile}")

    default_region = get_default_region(selected_profile)
    logger.info("Fetching available AWS regions...")
    regions = order_regions(get_aws_regions(cli, selected_profile), default_region)

    selected_region = _preset_or_ask(
        prompter, region, "Available AWS regions:", regions,
        "\nSelect a region (enter number): ", regions, region_validator, "Region"
    )
    console.print(f"\nUsing AWS region: {selected_region}")

    logger.info("Checking if Inspector is available in the selected region...")
    if not is_inspector_available(cli, selected_region, selected_profile):
        console.print(
            f"AWS Inspector is not available in the {selected_region} region. "
            "Please select a different region."
        )
        return None

    if scenario is not None and scenario not in SCENARIOS:
        scenario = get_scenario(scenario).key
    finding_type = _preset_or_ask(
        prompter, scenario, "Select finding type:",
        [f"{s.title} ({s.description})" for s in SCENARIOS.values()],
        "\nSelect finding type (enter number): ", None, scenario_validator, "Finding type"
    )
    selected = get_scenario(finding_type)
    console.print(f"\nSelected option: {selected.title}")
    console.print("\nRetrieving Inspector findings. This may take a few minutes...")

    findings = get_inspector_findings(cli, selected_profile, selected_region, selected.key)
    if not findings:
        console.print("No findings to export.")
        return None

    logger.info("Generating CSV report...")
    csv_text = findings_to_csv(findings)
    if not csv_text:
        console.print("Error generating CSV content.")
        return None

    report_path = save_csv_report(csv_text, selected, out_dir=report_dir)
    if report_path is None:
        return None
    print_summary_and_report_path(console, findings, report_path)
    return report_path


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Export AWS Inspector Critical/High findings to CSV."
    )
    p.add_argument(
        "--report-dir",
        default=DEFAULT_REPORT_DIR,
        help="Directory to save the CSV report (default: current directory)",
    )
    p.add_argument(
        "--profile",
        help="AWS profile name; skips the profile prompt when it exists",
    )
    p.add_argument(
        "--region",
        help="AWS region; skips the region prompt when it is in the region list",
    )
    p.add_argument(
        "--scenario",
        choices=sorted(list(SCENARIOS) + [s.label for s in SCENARIOS.values()]),
        help="Finding type by number or label (e.g. 2 or all_active)",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    with AwsCli() as cli, Prompter() as prompter:
        try:
            run_report(
                cli,
                prompter,
                report_dir=args.report_dir,
                profile=args.profile,
                region=args.region,
                scenario=args.scenario,
            )
        except (KeyboardInterrupt, EOFError):
            prompter.console.print("\nProcess interrupted. Cleaning up...")
        except Exception as e:
            logger.error("An error occurred: %s", e)
    return 0


if __name__ == "__main__":
    sys.exit(main())
