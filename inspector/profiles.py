# inspector/profiles.py
"""
Profile discovery from the local AWS CLI files.

- ~/.aws/credentials sections look like [name]
- ~/.aws/config sections look like [profile name]
"""

import logging
import os
import re
from typing import Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

CREDENTIALS_PROFILE_RE = re.compile(r"\[(.*?)\]")
CONFIG_PROFILE_RE = re.compile(r"\[profile (.*?)\]")


def resolve_home(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    home = environ.get("HOME") or environ.get("USERPROFILE")
    if not home:
        raise RuntimeError("Could not determine home directory")
    return home


def _read_text(path: str) -> str:
    if not os.path.exists(path):
        return ""
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as fh:
            return fh.read()
    except OSError as e:
        logger.warning("Could not read %s: %s", path, e)
        return ""


def profiles_from_text(text: str, pattern: "re.Pattern[str]") -> List[str]:
    return pattern.findall(text)


def _unique(names: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(names))


def get_aws_profiles(home: Optional[str] = None,
                     credentials_path: Optional[str] = None,
                     config_path: Optional[str] = None) -> List[str]:
    """
    Return profile names found in the credentials and config files.

    Duplicates are dropped, first-seen order is kept. Missing files count as
    zero profiles; a missing home directory raises RuntimeError.
    """
    if credentials_path is None or config_path is None:
        home = home or resolve_home()
        aws_dir = os.path.join(home, ".aws")
        credentials_path = credentials_path or os.path.join(aws_dir, "credentials")
        config_path = config_path or os.path.join(aws_dir, "config")

    names = profiles_from_text(_read_text(credentials_path), CREDENTIALS_PROFILE_RE)
    names += profiles_from_text(_read_text(config_path), CONFIG_PROFILE_RE)
    profiles = _unique(names)
    logger.debug("Found %d profiles in %s and %s", len(profiles), credentials_path, config_path)
    return profiles
