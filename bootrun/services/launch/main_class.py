"""
Main class discovery from compiled classes.

Scans ``*.class`` files for a ``public static void main(String[])``
descriptor and, optionally, an annotation type, by looking for their
entries in each class file's constant pool.
"""

from pathlib import Path

from ...core.exceptions import EntryPointNotFound

CLASS_FILE_MAGIC = b"\xca\xfe\xba\xbe"
MAIN_METHOD_NAME = b"\x00\x04main"
MAIN_METHOD_DESCRIPTOR = b"([Ljava/lang/String;)V"


def _annotation_descriptor(annotation: str) -> bytes:
    return ("L" + annotation.replace(".", "/") + ";").encode()


def _class_name(classes_directory: Path, class_file: Path) -> str:
    relative = class_file.relative_to(classes_directory).with_suffix("")
    return ".".join(relative.parts)


def _is_candidate(data: bytes, annotation: bytes | None) -> bool:
    if not data.startswith(CLASS_FILE_MAGIC):
        return False
    if MAIN_METHOD_NAME not in data or MAIN_METHOD_DESCRIPTOR not in data:
        return False
    return annotation is None or annotation in data


def find_main_classes(classes_directory: Path, annotation: str | None = None) -> list[str]:
    """
    List classes under ``classes_directory`` that look runnable.

    Raises:
        EntryPointNotFound: If a class file can't be read
    """
    if not classes_directory.is_dir():
        return []

    descriptor = _annotation_descriptor(annotation) if annotation else None
    found = []
    for class_file in sorted(classes_directory.rglob("*.class")):
        try:
            data = class_file.read_bytes()
        except OSError as e:
            raise EntryPointNotFound(
                f"Unable to read class file {class_file}", cause=e
            ) from e
        if _is_candidate(data, descriptor):
            found.append(_class_name(classes_directory, class_file))
    return found


def find_single_main_class(classes_directory: Path, annotation: str | None = None) -> str | None:
    """
    Find the one main class under ``classes_directory``.

    Returns:
        The fully qualified class name, or None if there is none

    Raises:
        EntryPointNotFound: If more than one candidate is found
    """
    candidates = find_main_classes(classes_directory, annotation)
    if len(candidates) > 1:
        raise EntryPointNotFound(
            "Unable to find a single main class from the following candidates "
            f"{candidates}, please add a 'main_class' property",
            classes_directory=str(classes_directory),
        )
    return candidates[0] if candidates else None
