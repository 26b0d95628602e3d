"""
Versioning for glint. The version number is hard-coded, and for dev
installs (a git checkout) it is extended with info from git.
"""

import logging
import subprocess
from pathlib import Path


# This is the reference version number, to be bumped before each release.
__version__ = "0.1.0"


logger = logging.getLogger("glint")

# The repo dir if this is a git checkout, otherwise None.
repo_dir = Path(__file__).parents[1]
repo_dir = repo_dir if repo_dir.joinpath(".git").is_dir() else None


def get_version():
    """Get the version string."""
    if repo_dir:
        return get_extended_version()
    else:
        return __version__


def get_extended_version():
    """Get an extended version string with information from git."""

    release, post, labels = get_version_info_from_git()

    base_release = ".".join(__version__.split(".")[:3])

    if not release:
        release = base_release
    elif release != base_release:
        logger.warning("Glint version from git and __version__ don't match.")

    version = release
    if post and post != "0":
        version += f".post{post}"
    if labels:
        version += "+" + ".".join(labels)

    return version


def get_version_info_from_git():
    """Get (release, post, labels) from git.

    With `release` the version number from the latest tag, `post` the
    number of commits since that tag, and `labels` a list with the
    git-hash and optionally a dirty flag.
    """
    command = ["git", "describe", "--long", "--always", "--tags", "--dirty"]
    try:
        p = subprocess.run(command, cwd=repo_dir, capture_output=True)
    except OSError as e:
        logger.warning("Could not get glint version: " + str(e))
        return None, None, ["unknown"]

    output = p.stdout.decode(errors="ignore")
    if p.returncode:
        stderr = p.stderr.decode(errors="ignore")
        logger.warning(f"Could not get glint version.\n\nstdout: {output}\n\nstderr: {stderr}")
        return None, None, ["unknown"]

    parts = output.strip().lstrip("v").split("-")
    if len(parts) <= 2:
        # No tags, so only the git hash and maybe 'dirty'
        parts = [None, None, *parts]
    release, post, *labels = parts
    return release, post, labels


__version__ = get_version()
