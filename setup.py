import os
from setuptools import setup, find_packages

# exec _version.py directly, the package is not importable before install
version_file = os.path.join(os.path.dirname(__file__), "verbump", "_version.py")
with open(version_file) as f:
    exec(f.read())

setup(
    name="verbump",
    version=get_pip_version() if "get_pip_version" in locals() else "0.0.0",
    description="Schema-driven version parsing, rendering and bumping for SemVer, CalVer and hybrids",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "verbump=verbump.cli:main",
        ],
    },
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Build Tools",
        "Topic :: Software Development :: Version Control",
        "Topic :: Utilities",
    ],
    python_requires=">=3.8",
)
