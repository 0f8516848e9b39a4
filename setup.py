from setuptools import setup, find_packages

setup(
    name = "jstor-import",
    version = "0.1.0",
    packages = find_packages(include = ["jstor_import", "jstor_import.*"]),
    install_requires=[
        "aiofiles",
        "loguru",
        "pandas>=2.0",
        "pydantic>=2.0",
        "PyYAML",
        "tqdm",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points = {
        "console_scripts": [
            "jstor-import = jstor_import.pipeline:cli",
        ],
    },
    python_requires = ">=3.9",
)
