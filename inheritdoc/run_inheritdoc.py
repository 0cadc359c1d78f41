"""Orchestration of a full inheritdoc run over a directory tree."""

import logging
import os
from pathlib import Path
from typing import Any

from inheritdoc.build_index import build_index
from inheritdoc.compile_trees import compile_trees
from inheritdoc.find_doc_files import find_doc_files
from inheritdoc.hierarchy_resolver import sort_types
from inheritdoc.inheritance_merger import InheritanceMerger
from inheritdoc.log_level import LogCallback, LogLevel, logging_callback
from inheritdoc.module_document import ModuleDocument
from inheritdoc.read_doc_file import load_modules
from inheritdoc.type_descriptor import TypeDescriptor
from inheritdoc.type_registry import TypeRegistry
from inheritdoc.wildcard_to_regex import split_patterns
from inheritdoc.write_doc_files import write_doc_files

logger = logging.getLogger(__name__)


def run_inheritdoc(
    config: dict[str, Any], log: LogCallback | None = None
) -> list[Path]:
    """Replace ``<inheritdoc/>`` tags in every matching documentation file.

    Returns the documentation files written. Raises
    ``CyclicTypeDependencyError`` when the type hierarchy cannot be ordered.
    """
    log = log or logging_callback(logger)
    log(
        LogLevel.INFO,
        "run_inheritdoc():"
        + ",".join(f"{k}={config.get(k)}" for k in sorted(config)),
    )

    base_path = Path(config.get("base_path") or Path.cwd())
    metadata_dir = Path(config.get("metadata_dir") or base_path)
    yml_files = sorted(metadata_dir.rglob("*.yml"))
    if not yml_files:
        msg = f"No DocFX .yml metadata files found under: {metadata_dir}"
        raise SystemExit(msg)
    descriptors = build_index(yml_files, log)

    doc_files = find_doc_files(
        base_path, split_patterns(config.get("doc_file_patterns"))
    )
    modules = load_modules(doc_files, descriptors, log)
    reference_modules = load_modules(
        [Path(p) for p in split_patterns(config.get("global_source_files"))],
        descriptors,
        log,
        is_reference=True,
    )
    all_modules = modules + reference_modules

    registry = build_registry(all_modules, descriptors)
    trees = compile_trees(
        all_modules, split_patterns(config.get("exclude_types")), log
    )
    order = sort_types(trees, lambda name: _chain_names(registry, name))
    merger = InheritanceMerger(registry, trees, log)
    replaced = merger.merge(order) - merger.dropped
    if merger.dropped:
        log(
            LogLevel.WARN,
            f"{merger.dropped} <inheritdoc/> tag(s) had nothing to inherit from",
        )

    if replaced == 0:
        log(
            LogLevel.INFO,
            "No <inheritdoc/> tags replaced (if you've used <inheritdoc/> tags, "
            "ensure XML documentation files are enabled in your build settings)",
        )
        return []

    written = write_doc_files(
        modules, trees, log, overwrite=bool(config.get("overwrite_existing"))
    )
    relative = [os.path.relpath(p, base_path) for p in written]
    log(
        LogLevel.INFO,
        f"{replaced} <inheritdoc/> tag(s) replaced in {len(written)} "
        f"XML documentation file(s) ({','.join(relative)})",
    )
    return written


def build_registry(
    modules: list[ModuleDocument],
    descriptors: dict[str, dict[str, TypeDescriptor]],
) -> TypeRegistry:
    """Register loaded modules first, then metadata of undocumented modules."""
    registry = TypeRegistry()
    for module in modules:
        registry.add_module(module.descriptors.values())
    for module_descriptors in descriptors.values():
        registry.add_module(module_descriptors.values())
    return registry


def _chain_names(registry: TypeRegistry, name: str) -> list[str]:
    descriptor = registry.lookup(name)
    if descriptor is None:
        return []
    return [d.name for d in registry.ancestor_chain(descriptor)]

