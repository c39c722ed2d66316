# setup.py
from setuptools import setup, find_packages

setup(
    name="stepwise",
    version="0.1.0",
    description="Small-step rewriting interpreter that exposes every reduction",
    packages=find_packages(include=["stepwise", "stepwise.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis", "pytest-asyncio"],
    },
    entry_points={
        "console_scripts": ["stepwise=stepwise.__main__:main"],
    },
    zip_safe=False,
)
