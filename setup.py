from setuptools import find_packages, setup

setup(
    name="popgenlib",
    version="0.1.0",
    description="Population genetics diversity, neutrality and linkage statistics, with Pool-Seq corrections",
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.17.0",
        "scipy>=1.5.0",
        "tskit>=0.3.1",
    ],
    extras_require={
        "test": [
            "pytest",
            "msprime>=1.0",
        ],
    },
    packages=find_packages(exclude=["test", "test.*", "docsrc"]),
)
