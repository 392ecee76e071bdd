from codecs import open
from os import path

from setuptools import find_packages, setup

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="coverage-diff",
    version="0.3.0",
    packages=find_packages(exclude=["contrib", "docs", "tests*"]),
    package_data={"coverage_diff": ["py.typed"]},
    description="Coverage difference between two SimpleCov resultsets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    install_requires=[
        "cerberus",
        "click>=8.1",
        "httpx>=0.23.0",
        "orjson",
        "prometheus-client",
        "pyyaml",
        "sentry-sdk>=2.13.0",
    ],
    extras_require={
        "tests": [
            "mock",
            "pytest",
            "pytest-asyncio",
            "pytest-mock",
            "respx",
        ],
    },
    entry_points={
        "console_scripts": [
            "coverage-diff=coverage_diff.main:cli",
        ],
    },
)
