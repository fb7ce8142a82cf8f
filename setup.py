"""
Setup script for the Category Filter package.

This package provides the filter endpoint, fragment and term caches, and the
widget rendering for the AJAX blog category filter.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="category-filter",
    version="1.0.0",
    author="Category Filter Team",
    description="AJAX category filter for blog listings with cached fragment extraction",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "infrastructure", "infrastructure.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        # AWS SDK
        "boto3>=1.28.85",
        "botocore>=1.31.85",

        # Anti-forgery tokens
        "PyJWT>=2.8.0",

        # HTTP client
        "requests>=2.31.0",

        # HTML parsing
        "beautifulsoup4>=4.12.0",
    ],
    extras_require={
        "dev": [
            # Testing
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "moto>=5.0.0",

            # Code quality
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.1",

            # Type stubs
            "boto3-stubs[dynamodb,cloudwatch]>=1.28.85",
            "types-requests>=2.31.0",
        ],
        "cdk": [
            # Infrastructure as Code
            "aws-cdk-lib>=2.100.0",
            "constructs>=10.0.0,<11.0.0",
        ],
    },
    include_package_data=True,
    package_data={
        "category_filter": ["assets/*.js", "assets/*.css"],
    },
    zip_safe=False,
)
