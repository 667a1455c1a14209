# setup.py
from setuptools import setup, find_packages


def parse_reqs(fname="requirements.txt"):
    with open(fname) as f:
        # strip comments and empty lines
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="terrasignal",
    version="0.1.0",
    package_dir={"terrasignal": "terrasignal"},
    packages=find_packages(include=["terrasignal", "terrasignal.*"]),
    install_requires=parse_reqs(),
    extras_require={"test": ["pytest"]},
    include_package_data=True,
    python_requires=">=3.10",
    entry_points={"console_scripts": ["terrasignal=terrasignal.core.cli:cli"]},
)
