from coverage_diff.main import cli

cli()
