"""
Setup configuration for the dynamo-fixtures package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="dynamo-fixtures",
    version="0.1.0",
    author="dynamo-fixtures Contributors",
    author_email="contributors@dynamo-fixtures.example.com",
    description="Local in-memory and remote DynamoDB environments for test suites",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/dynamo-fixtures",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: Pytest",
        "Topic :: Software Development :: Testing",
        "Topic :: Database",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest-cov",
            "ruff",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "dynamo-fixtures=dynamo_fixtures.__main__:main",
        ],
        "pytest11": [
            "dynamo_fixtures = dynamo_fixtures.pytest_plugin",
        ],
    },
    project_urls={
        "Bug Reports": "https://github.com/yourusername/dynamo-fixtures/issues",
        "Source": "https://github.com/yourusername/dynamo-fixtures",
    },
)
