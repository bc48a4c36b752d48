import multiprocessing
import platform

from sakai import cli, config, lib, schemas, server, services, utils

__all__ = (
    "cli",
    "config",
    "lib",
    "schemas",
    "server",
    "services",
    "utils",
)

if platform.system() == "Darwin":
    multiprocessing.set_start_method("fork", force=True)
