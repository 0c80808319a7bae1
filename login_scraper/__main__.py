"""
Main entry point for the login_scraper package.

Allows running a scrape as: python -m login_scraper
"""

from login_scraper.cli import main

if __name__ == "__main__":
    main()
