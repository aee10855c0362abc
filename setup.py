import re
from pathlib import Path

from setuptools import setup, find_packages

# Read the version without importing the package and its dependencies
_version_file = Path(__file__).parent / "wprintf" / "version.py"
__version__ = re.search(r'__version__ = "([^"]+)"', _version_file.read_text()).group(1)

setup(
    name="wprintf",
    version=__version__,
    description="printf-family formatting of wide text with pluggable locales",
    packages=find_packages(include=["wprintf", "wprintf.*"]),
    install_requires=[
        "lark>=1.1.5",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
)
