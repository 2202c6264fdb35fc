"""Stock filters deciding which entries a FolderWatcher tracks."""

from pathlib import Path
from typing import Callable, Iterable

EntryFilter = Callable[[Path], bool]

# Folders TrakEM2 creates for its image caches
CACHE_FOLDER_PREFIX = "trakem2."


def accept_all_files(path: Path) -> bool:
    """Accept every regular file."""
    return path.is_file()


def normalize_extensions(extensions: Iterable[str]) -> frozenset:
    """
    Normalize extensions to lowercase with a leading dot.
    
    Args:
        extensions: Extensions such as "txt", ".PNG"
        
    Returns:
        Frozen set of normalized extensions
    """
    normalized = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return frozenset(normalized)


def extension_filter(*extensions: str) -> EntryFilter:
    """
    Build a filter accepting regular files with one of the given extensions.
    
    Matching is case-insensitive and the leading dot is optional.
    
    Args:
        *extensions: Accepted extensions
        
    Returns:
        A filter function
        
    Raises:
        ValueError: If no extension is given
    """
    allowed = normalize_extensions(extensions)
    if not allowed:
        raise ValueError("extension_filter needs at least one extension")

    def accept(path: Path) -> bool:
        return path.suffix.lower() in allowed and path.is_file()

    accept.extensions = allowed
    return accept


def folder_filter(prefix: str = CACHE_FOLDER_PREFIX) -> EntryFilter:
    """
    Build a filter accepting directories whose name does not start with prefix.
    
    Args:
        prefix: Name prefix of folders to skip; empty accepts all directories
        
    Returns:
        A filter function
    """
    def accept(path: Path) -> bool:
        if prefix and path.name.startswith(prefix):
            return False
        return path.is_dir()

    return accept
