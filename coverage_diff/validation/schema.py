# Schema of a SimpleCov resultset:
#   {<run label>: {"coverage": {<filename>: {"lines": [...], "branches": {...}}}}}
# Run labels and filenames are arbitrary, so they are matched with valuesrules.
# Other keys SimpleCov writes ("timestamp") are accepted and ignored.

hit_count = {"type": "integer", "min": 0, "check_with": "not_boolean"}

line_coverage = {
    "type": "list",
    "required": True,
    "schema": {**hit_count, "nullable": True},
}

branch_coverage = {
    "type": "dict",
    "nullable": True,
    "keysrules": {"type": "string"},
    "valuesrules": {
        "type": "dict",
        "keysrules": {"type": "string"},
        "valuesrules": hit_count,
    },
}

file_coverage = {
    "type": "dict",
    "allow_unknown": True,
    "schema": {
        "lines": line_coverage,
        "branches": branch_coverage,
    },
}

run_coverage = {
    "type": "dict",
    "allow_unknown": True,
    "schema": {
        "coverage": {
            "type": "dict",
            "required": True,
            "keysrules": {"type": "string"},
            "valuesrules": file_coverage,
        },
    },
}

schema = {
    "runs": {
        "type": "dict",
        "required": True,
        "keysrules": {"type": "string"},
        "valuesrules": run_coverage,
    },
}
