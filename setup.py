# setup.py
from setuptools import setup, find_packages

setup(
    name="site_sage",
    version="0.1.0",
    description="Single-domain crawler that answers questions about the site with an LLM",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "nltk>=3.8",
        "numpy>=1.24",
        "openai>=1.0",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site_sage=site_sage.cli:cli"],
    },
    python_requires=">=3.11",
)
