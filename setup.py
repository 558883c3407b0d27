#!/usr/bin/env python3
"""
jsdoclint - Setup Configuration
setup.py with extras_require, version checking, and install validation.
"""

import re
import sys
from pathlib import Path
from setuptools import setup, find_packages
from setuptools.command.install import install
from setuptools.command.develop import develop

# Version requirements
MIN_PYTHON_VERSION = (3, 10)

# Read version from the package
def get_version():
    """Extract __version__ from jsdoclint/__init__.py"""
    init_path = Path(__file__).parent / "jsdoclint" / "__init__.py"
    if init_path.exists():
        match = re.search(r'^__version__ = "([^"]+)"', init_path.read_text(encoding="utf-8"), re.M)
        if match:
            return match.group(1)
    return "0.1.0"

# Check Python version
def check_python_version():
    """Validate Python version meets minimum requirements"""
    current = sys.version_info[:2]
    if current < MIN_PYTHON_VERSION:
        sys.stderr.write(
            f"ERROR: jsdoclint requires Python {MIN_PYTHON_VERSION[0]}.{MIN_PYTHON_VERSION[1]}+\n"
            f"Current Python version: {current[0]}.{current[1]}\n"
        )
        sys.exit(1)

# Core dependencies
INSTALL_REQUIRES = [
    "ply>=3.11",
    "jinja2>=3.0.0",
]

# Optional dependency groups (extras_require)
EXTRAS_REQUIRE = {
    # Test suite only
    "test": [
        "pytest>=7.4.0",
        "hypothesis>=6.0.0",
    ],

    # Development dependencies
    "dev": [
        # Testing
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "hypothesis>=6.0.0",
        # Linting and formatting
        "black>=23.0.0",
        "flake8>=7.0.0",
        "mypy>=1.7.0",
        "ruff>=0.1.0",
        # Type stubs
        "types-setuptools>=69.0.0",
    ],
}

# Combine all extras for complete installation
EXTRAS_REQUIRE["all"] = [
    dep for deps in EXTRAS_REQUIRE.values() for dep in deps
]

# Custom install command with validation
class CustomInstallCommand(install):
    """Custom install command with version checking"""

    def run(self):
        check_python_version()
        print("Installing jsdoclint...")
        install.run(self)
        self.validate_installation()

    def validate_installation(self):
        """Validate that core dependencies are installed correctly"""
        print("\nValidating installation...")
        try:
            import ply
            import jinja2
            print(f"✓ PLY (Python Lex-Yacc) {ply.__version__}")
            print(f"✓ Jinja2 {jinja2.__version__}")
            print("\n✅ Installation validated successfully!")
        except ImportError as e:
            print(f"\n⚠️  Warning: Could not validate installation: {e}")

# Custom develop command with validation
class CustomDevelopCommand(develop):
    """Custom develop command with version checking"""

    def run(self):
        check_python_version()
        print("Installing jsdoclint in development mode...")
        develop.run(self)

# Read long description from README
def read_readme():
    """Read README.md for long description"""
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, encoding="utf-8") as f:
            return f.read()
    return "Validate JSDoc comments against the JavaScript functions they document"

# Main setup configuration
if __name__ == "__main__":
    check_python_version()

    setup(
        name="jsdoclint",
        version=get_version(),
        description="Validate JSDoc comments against the JavaScript functions they document",
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        license="MIT",
        packages=find_packages(include=["jsdoclint*"]),
        package_data={"jsdoclint.reporting": ["templates/*.jinja"]},
        include_package_data=True,
        python_requires=">=3.10",
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
        cmdclass={
            "install": CustomInstallCommand,
            "develop": CustomDevelopCommand,
        },
        entry_points={
            "console_scripts": [
                "jsdoclint=jsdoclint.driver:main",
            ],
        },
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Quality Assurance",
        ],
        keywords=[
            "jsdoc",
            "javascript",
            "linter",
            "documentation",
        ],
    )
