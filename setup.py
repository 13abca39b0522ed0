"""Package setup for site_scanner."""

from setuptools import setup, find_packages

setup(
    name="site-scanner",
    version="0.1.0",
    description="Website scanner: crawls a site from one URL and reports "
                "the status, headers and timing of every page, asset and "
                "external link",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "playwright>=1.40.0",
        "tqdm>=4.66.0",
        "colorlog>=6.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-scanner=site_scanner.cli:main",
        ],
    },
)
