"""
Console command groups.

Each subpackage exposes an entrypoint module; hosts pick the groups they
load through their profile (see adminconsole.interface.hosts).
"""
