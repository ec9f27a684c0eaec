import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from rulelink.errors import (
    InvalidArgument,
    LinkConflict,
    MirrorIOError,
    PermissionDenied,
    SourceNotFound,
)


@dataclass(frozen=True)
class LinkTask:
    """A source file and the path of the link that should point at it"""

    source_path: Path
    destination_path: Path

    def __str__(self) -> str:
        return f"{self.destination_path} -> {self.source_path}"


def _abspath(path: Union[str, Path]) -> Path:
    # Normalises `..` and trailing separators without following symlinks
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def source_root_for(target_root: Union[str, Path, None], cwd: Optional[Path] = None) -> Path:
    """
    Derives the rules directory for a target project. The rules directory is named after the last component of the
    target root and lives in `cwd`.

    Parameters
    ----------
    target_root : str | Path | None
        Root of the external project that receives the links
    cwd : Path, optional
        Directory holding one rules directory per project, defaults to the current working directory

    Returns
    -------
    Path
        `cwd / basename(target_root)`
    """

    if target_root is None or not str(target_root).strip():
        raise InvalidArgument("Provide the target project root path as argument")

    name = _abspath(target_root).name
    if not name:
        raise InvalidArgument(f"Cannot derive a project name from {target_root}")

    base = Path.cwd() if cwd is None else Path(cwd)
    return base.joinpath(name)


def _walk_error(e: OSError) -> None:
    if isinstance(e, PermissionError):
        raise PermissionDenied(f"Cannot read {e.filename}: {e.strerror}") from e
    raise MirrorIOError(f"Cannot read {e.filename}: {e.strerror or e}") from e


def link_tasks(source_root: Path, target_root: Path, ignore: Iterable[str] = ()) -> List[LinkTask]:
    """
    Builds one LinkTask per regular file found under `source_root`. Symlinks are never treated as files and linked
    directories are not descended into.
    """

    if not source_root.is_dir():
        raise SourceNotFound(f"Source directory {source_root} does not exist")

    src = source_root.resolve()
    dst = _abspath(target_root)
    skip = set(ignore)

    tasks = []
    for r, d, f in os.walk(src, onerror=_walk_error):
        d[:] = [dd for dd in d if dd not in skip]
        for ff in f:
            if ff in skip:
                continue
            file = Path(r).joinpath(ff)
            if file.is_symlink() or not file.is_file():
                continue
            tasks.append(LinkTask(source_path=file, destination_path=dst.joinpath(file.relative_to(src))))

    return sorted(tasks, key=lambda t: t.source_path.relative_to(src).parts)


def _check(task: LinkTask, force: bool) -> bool:
    """Returns True when the destination needs a new link, raising where `link` would refuse"""

    link_path = task.destination_path
    if link_path.is_symlink():
        if not force:
            if Path(os.readlink(link_path)) == task.source_path:
                return False
            raise LinkConflict(f"{link_path} already links to {os.readlink(link_path)}")
    elif link_path.is_dir():
        raise MirrorIOError(f"{link_path} is a directory and cannot be replaced by a link")
    elif link_path.exists() and not force:
        raise LinkConflict(f"{link_path} already exists")
    return True


def link(task: LinkTask, force: bool = True) -> bool:
    """
    Creates the symbolic link described by `task`, making any missing parent directories.

    Parameters
    ----------
    task : LinkTask
        The link to create
    force : bool
        Replace whatever already exists at the destination. When False an existing link to the same source is left
        alone and anything else raises LinkConflict.

    Returns
    -------
    bool
        True when a link was created or replaced
    """

    link_path = task.destination_path
    link_path.parent.mkdir(parents=True, exist_ok=True)

    if not _check(task, force):
        return False
    if link_path.is_symlink() or link_path.exists():
        link_path.unlink()

    link_path.symlink_to(task.source_path)
    return True


def mirror(
    source_root: Path,
    target_root: Path,
    force: bool = True,
    dry_run: bool = False,
    ignore: Iterable[str] = (),
    echo: Optional[Callable[[LinkTask], None]] = None,
) -> int:
    """
    Mirrors `source_root` into `target_root` as a tree of symbolic links. Files in `target_root` without a
    counterpart in `source_root` are left untouched. The first filesystem error aborts the run.

    Returns the number of links created or replaced, or for a dry run the number that would be.
    """

    src = source_root.resolve()
    dst = _abspath(target_root).resolve()
    if dst == src or src in dst.parents:
        raise InvalidArgument(f"Target {target_root} is inside the source directory {src}")

    tasks = link_tasks(source_root, target_root, ignore=ignore)

    count = 0
    for task in tasks:
        if dry_run:
            if _check(task, force):
                count += 1
        else:
            try:
                if link(task, force=force):
                    count += 1
            except PermissionError as e:
                raise PermissionDenied(f"Cannot link {task.destination_path}: {e.strerror}") from e
            except OSError as e:
                raise MirrorIOError(f"Cannot link {task.destination_path}: {e.strerror or e}") from e

        if echo is not None:
            echo(task)

    return count


def link_mirror(src: Path, dst: Path) -> int:
    """
    Creates a mirror of the source directory filled with symbolic links to the files. This function does not remove
    any files/directories that exist in `dst` if they dont exist in `src`.

    Parameters
    ----------
    src : Path
        The root directory to mirror
    dst : Path
        The root of the directory containing the links

    Returns
    -------
    int
        Number of links created or replaced
    """

    return mirror(src, dst, echo=lambda task: print(task))
