"""
Setup configuration for the Tonal Harmony package.

This allows you to install the project with:
    pip install -e .

After installation, you can import modules like:
    from tonal_harmony import HarmonyEngine
    from tonal_harmony.rules.numerals import chord_to_numeral
"""

from setuptools import setup, find_packages

# Read the README for long description
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    # -------------------------
    # Basic Package Information
    # -------------------------
    name="tonal-harmony",
    version="0.1.0",
    description="Key detection, Roman numeral analysis, scales and genre-based chord progressions",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # -------------------------
    # Package Discovery
    # -------------------------
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    package_dir={"": "."},

    # -------------------------
    # Python Version Requirement
    # -------------------------
    python_requires=">=3.9",

    # -------------------------
    # Dependencies
    # -------------------------
    # Core dependencies (installed automatically)
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
    ],

    # Optional dependencies (install with pip install -e ".[dev]")
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "flake8>=6.1.0",
            "black>=23.7.0",
            "mypy>=1.5.0",
        ],
    },

    # -------------------------
    # Entry Points (CLI commands)
    # -------------------------
    entry_points={
        "console_scripts": [
            # harmony-cli analyze C Am F G
            "harmony-cli=tonal_harmony.app.cli:main",
        ],
    },

    # -------------------------
    # Metadata
    # -------------------------
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Sound/Audio :: Analysis",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="music theory, harmony, chord progression, roman numeral, key detection",
)
