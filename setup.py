"""
Setup script for keysense.

keysense is the adaptive curriculum planner behind a piano learning app.
It decides what a learner should practise next:

1. Skill Graph - a 100-skill year-one piano curriculum with prerequisites
2. Mastery Tracking - decay-based review scheduling and mastery promotion
3. Session Planning - warm-up, lesson and challenge exercises with reasons

The 'keysense' command plans sessions from learner profile snapshots.
"""

from setuptools import find_packages, setup

setup(
    name="keysense",
    version="0.1.0",
    description="Adaptive piano curriculum planner - skill graph, decay and session planning",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="KeySense",
    packages=find_packages(include=["keysense", "keysense.*"]),
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "typer>=0.12.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "keysense=keysense.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    keywords="piano learning curriculum spaced-repetition education",
)
