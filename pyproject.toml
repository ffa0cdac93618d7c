[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "linuxlab"
version = "0.1.0"
description = "Small working examples of Unix systems programming: sockets, pipes, FIFOs, shared memory, threads, signals and a mini shell."
requires-python = ">=3.10"
keywords = [
    "unix",
    "systems-programming",
    "sockets",
    "ipc",
    "threads",
    "signals",
    "shell",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Networking",
    "Topic :: System :: Operating System",
]
dependencies = [
    "aiohttp",
    "pymysql",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
linuxlab-http = "linuxlab.httpdemo:main"
linuxlab-udp-client = "linuxlab.udpchat:client_main"
linuxlab-udp-server = "linuxlab.udpchat:server_main"
linuxlab-select = "linuxlab.selectserver:main"
linuxlab-im = "linuxlab.imserver:main"
linuxlab-shell = "linuxlab.minishell:main"
linuxlab-pipe = "linuxlab.pipes:main"
linuxlab-fifo-read = "linuxlab.fifo:reader_main"
linuxlab-fifo-write = "linuxlab.fifo:writer_main"
linuxlab-shm-write = "linuxlab.shm:writer_main"
linuxlab-shm-read = "linuxlab.shm:reader_main"

[tool.hatch.build.targets.wheel]
packages = ["linuxlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
