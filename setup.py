from setuptools import setup, find_packages

setup(
    name="clinic-simulator",
    version="0.1.0",
    description="Discrete event simulation of a clinic: reception triage and consultation offices",
    author="adamfilli",
    packages=find_packages(include=["clinicsim", "clinicsim.*"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": ["pytest", "matplotlib"],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
