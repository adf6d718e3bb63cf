from setuptools import setup, find_packages

setup(
    name="sampleagg",
    version="0.1.0",
    description="Mergeable weighted reservoir sampling for distributed table aggregation",
    author="adamfilli",
    packages=find_packages(include=["sampleagg", "sampleagg.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
