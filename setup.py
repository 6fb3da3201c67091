from setuptools import setup, find_packages

setup(
    name="medtrack",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt<5",
        "python-multipart",
        "openai",
        "python-dotenv",
        "pydantic",
        "pydantic-settings",
        "email-validator",
        "websockets",
        "tzdata",
        "prometheus-client",
        "prometheus-fastapi-instrumentator",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
