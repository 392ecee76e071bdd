"""Configuration options that affect a whole run of coverage-diff"""

import logging

from coverage_diff.validation.validator import CoverageDiffValidator

log = logging.getLogger(__name__)


comment_fields = {
    # First line of the report
    "heading": {"type": "string", "empty": False},
    # Appends a table with the total line and branch coverage of both resultsets
    "show_totals": {"type": "boolean", "coerce": "flag"},
}

github_fields = {
    "api_url": {"type": "string", "empty": False},
    # [connect, read] timeouts, in seconds
    "timeouts": {
        "type": "list",
        "coerce": "comma_separated_ints",
        "minlength": 2,
        "maxlength": 2,
        "schema": {"type": "integer", "min": 1},
    },
}

config_schema = {
    # Prefix stripped from the filenames in the report (usually GITHUB_WORKSPACE)
    "workspace": {"type": "string", "nullable": True},
    "dry_run": {"type": "boolean", "coerce": "flag"},
    "log_level": {
        "type": "string",
        "coerce": str.upper,
        "allowed": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    },
    "comment": {"type": "dict", "schema": comment_fields},
    "github": {"type": "dict", "schema": github_fields},
}


def validate_install_configuration(inputted_dict):
    validator = CoverageDiffValidator(allow_unknown=True)
    is_valid = validator.validate(inputted_dict, config_schema)
    if not is_valid:
        log.warning(
            "Configuration considered invalid, using dict as it is",
            extra=dict(errors=validator.errors),
        )
        return inputted_dict
    return validator.document
