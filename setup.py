"""Setup script for bootrun."""

from setuptools import find_namespace_packages, setup

setup(
    name="bootrun",
    version="0.1.0",
    description="Run a JVM application from its build output, forked or inline",
    packages=find_namespace_packages(include=["bootrun", "bootrun.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "dependency-injector>=4.41",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bootrun=bootrun.__main__:main",
        ],
    },
)
