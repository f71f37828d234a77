import sys
from pathlib import Path

import pytest


# Ensure the `api/` directory is on sys.path so tests can import `autoack.*`
CURRENT_FILE = Path(__file__).resolve()
API_DIR = CURRENT_FILE.parents[1]  # .../api
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))


from autoack.pipeline.decision import RuleSet


@pytest.fixture
def full_rules():
    """Rule set touching every list, shaped like an exported configuration."""
    return RuleSet.from_dict({
        "internalDomain": "*.acme.com",
        "exclusion": {
            "domains": ["spam.com", "*.marketing.net"],
            "addresses": ["Boss@Partner.org"],
            "patterns": ["noreply@*", "no-reply@*", "postmaster@*", "mailer-daemon@*"],
        },
        "inclusion": {
            "addresses": ["vip@acme.com"],
            "domains": ["*.vip.com"],
        },
    })
