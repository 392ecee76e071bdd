def make_resultset(files, run_label="RSpec"):
    """
    Builds a resultset out of `{filename: lines}` or `{filename: (lines, branches)}`
    """
    coverage = {}
    for filename, data in files.items():
        if isinstance(data, tuple):
            lines, branches = data
            coverage[filename] = {"lines": lines, "branches": branches}
        else:
            coverage[filename] = {"lines": data}
    return {run_label: {"coverage": coverage}}
