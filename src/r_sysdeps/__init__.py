"""
r-sysdeps: ask a package manager server which system libraries and repository URLs fit this host.
"""

__all__ = [
    "cli",
    "client",
    "config",
    "errors",
    "models",
    "osdetect",
    "repository",
    "status",
    "sysreqs",
    "urls",
]
