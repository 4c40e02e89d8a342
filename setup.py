"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/pinsgen/pinsgen"
KEYWORDS = "embedded esp32 esp-hal rust firmware gpio pins codegen build"
HERE = os.path.dirname(os.path.abspath(__file__))



if __name__ == "__main__":
    setup(
        name="pinsgen",
        version="0.1.0",
        description="Build-time board pin mapping generator for esp-hal firmware",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.11",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=[],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["pinsgen=pinsgen.cli:main"]},
        include_package_data=True)
