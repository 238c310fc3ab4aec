# setup.py
from setuptools import setup, find_packages

setup(
    name="budget-insights",
    version="0.1.0",
    description="Budget evaluation, spending insights and alerts for a personal finance tracker",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "pandas>=1.4",
        "XlsxWriter>=3.0",
        "python-dotenv>=0.19",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "budget-insights=budget_insights.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
