"""Setup configuration for fastfood-pos project."""

from setuptools import setup, find_packages

setup(
    name="fastfood-pos",
    version="1.0.0",
    description="Point-of-sale client with cart aggregation and order submission, plus a FastAPI reference backend",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "httpx>=0.27.0",
        "sqlalchemy>=2.0.23",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "pos-client=pos_client.main:main",
            "pos-service=pos_service.main:main",
        ],
    },
)
