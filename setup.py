"""Package setup for login_scraper."""

from setuptools import setup, find_packages

setup(
    name="login-scraper",
    version="1.0.0",
    description="Log in to a CSRF-protected web app and scrape a protected table as JSON",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "colorlog>=6.8.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "login-scraper=login_scraper.cli:main",
        ],
    },
)
