[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shopmesh"
version = "0.1.0"
description = "Small shop backend: inventory and order services over MongoDB, with an HTTP gateway in front"
requires-python = ">=3.10"
dependencies = [
    "flask",
    "pymongo",
    "requests",
]
keywords = ["inventory", "orders", "api-gateway", "reverse-proxy", "mongodb", "flask", "microservices"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Framework :: Flask",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
shopmesh-gateway = "shopmesh.gateway:main"

[tool.hatch.build.targets.wheel]
packages = ["shopmesh"]

[tool.pytest.ini_options]
addopts = "-ra"
