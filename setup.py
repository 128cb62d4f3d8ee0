from pathlib import Path

from setuptools import find_namespace_packages, setup

# Load packages from requirements.txt
BASE_DIR = Path(__file__).parent
with open(Path(BASE_DIR, "requirements.txt")) as file:
    required_packages = [ln.strip() for ln in file.readlines() if ln.strip()]

# Define our package
setup(
    name="adaptlearn",
    version="0.1",
    description="Adaptive scoring and learning-style selection engine for personalised learning",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["adaptlearn", "adaptlearn.*"]),
    install_requires=required_packages,
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
