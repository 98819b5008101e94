import os

from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()


def read_requirements(path):
    if not os.path.exists(path):
        return []
    with open(path, encoding="utf-8") as fh:
        return [
            line.strip()
            for line in fh
            if line.strip() and not line.startswith("#") and not line.startswith("-r")
        ]


requirements = read_requirements("requirements.txt") or [
    "filelock>=3.12.0",
    "PyYAML>=6.0",
    "rich>=13.0.0",
]
test_requirements = read_requirements("requirements-dev.txt") or ["pytest>=7.0.0"]

setup(
    name="ifcfg-manager",
    version="0.1.0",
    description="Transactional editing of ifcfg network interface configuration files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["ifcfg_manager", "ifcfg_manager.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={"test": test_requirements},
    entry_points={
        "console_scripts": [
            "ifcfg-manager=ifcfg_manager.cli:main",
        ],
    },
    include_package_data=True,
)
