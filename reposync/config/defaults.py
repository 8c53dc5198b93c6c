# RepoSync Default Configuration
# Full default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "repository": {
        "path": "~/gitbase/provisioning",
        "branch": "HEAD",
    },
    "store": {
        "path": "~/.config/reposync/store.yaml",
    },
    "quota": {
        "max_resources": 0,
    },
    "sync": {
        "max_errors": 20,
        "ignore": ["*.md", "LICENSE*", ".github/**"],
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# RepoSync Configuration
# Version: 1.0
#
# Replicates resources defined in a git repository into a local resource store.
#
# repository.branch: the branch read as the current state of the source
# quota.max_resources: maximum number of resources, 0 = unlimited
# sync.max_errors: a sync stops once this many files failed
# sync.ignore: glob patterns of files that never become resources

"""
    return header + yaml.dump(copy.deepcopy(DEFAULT_CONFIG), default_flow_style=False, sort_keys=False, allow_unicode=True)
