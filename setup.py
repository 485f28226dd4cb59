from setuptools import setup, find_packages

setup(
    name="sw-customer-import",
    version="0.1.0",
    description="Import customers from csv files into a Shopware shop",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9",
        "PyYAML>=6.0",
        "jsonschema>=4.0",
        "requests>=2.28",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "swimport=swimport.cli:app",
        ],
    },
)
