from setuptools import setup, find_packages

setup(
    name="bond_risk_engine",
    version="0.1.0",
    description="Approximate yield and duration risk metrics for fixed-coupon bonds",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
