"""errors.py"""

import click


class MirrorError(click.ClickException):
    """Base for every failure that aborts a mirror run"""

    exit_code = 1


class InvalidArgument(MirrorError):
    """The target project root is missing or unusable"""


class SourceNotFound(MirrorError):
    """The rules directory matching the target does not exist"""


class PermissionDenied(MirrorError):
    """A directory or link could not be created due to permissions"""


class MirrorIOError(MirrorError):
    """Any other filesystem failure while linking"""


class LinkConflict(MirrorError):
    """Something already exists at the destination and overwriting is disabled"""
