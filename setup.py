"""
ECR Job Store 安装配置
"""
from setuptools import setup, find_packages

setup(
    name="ecr-jobstore",
    version="1.0.0",
    description="基于 Redis 的作业记录存储",
    author="ECR Team",
    author_email="",
    packages=find_packages(include=["core", "core.*", "api", "api.*"]),
    python_requires=">=3.10",
    install_requires=[
        "redis>=4.2",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "loguru>=0.7",
        "fastapi>=0.100",
        "uvicorn>=0.22",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24",
            "fakeredis>=2.20",
        ],
    },
    entry_points={
        "console_scripts": [
            "ecr-api=api.main:main",
        ],
    },
)
