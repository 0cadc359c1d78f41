"""Discovery of XML documentation files under a base path."""

from pathlib import Path

from inheritdoc.wildcard_to_regex import wildcard_to_regex

NEW_FILE_SUFFIX = ".new.xml"


def find_doc_files(base_path: Path, patterns: list[str]) -> list[Path]:
    """Return every ``*.xml`` file whose name matches one of ``patterns``.

    No patterns means every XML file. Output from previous runs that did not
    overwrite their input (``*.new.xml``) is never picked up.
    """
    regexes = [wildcard_to_regex(p) for p in patterns]
    return [
        f
        for f in sorted(base_path.rglob("*.xml"))
        if f.is_file()
        and not f.name.endswith(NEW_FILE_SUFFIX)
        and (not regexes or any(rx.match(f.name) for rx in regexes))
    ]
