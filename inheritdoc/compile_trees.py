"""Grouping of documentation entries into per-type trees."""

from inheritdoc.documentation_tree import DocumentationTree
from inheritdoc.log_level import LogCallback, LogLevel
from inheritdoc.member_key import MemberKind, parse_member_key
from inheritdoc.module_document import ModuleDocument
from inheritdoc.wildcard_to_regex import wildcard_to_regex
from inheritdoc.xml_nodes import fragment_from_element


def compile_trees(
    modules: list[ModuleDocument], exclude_types: list[str], log: LogCallback
) -> dict[str, DocumentationTree]:
    """Build one DocumentationTree per documented type, in load order.

    ``T:`` entries feed the type's root fragment; all other entries become
    member fragments. Entries that cannot be attributed to a type of their
    module, or whose type is excluded, are kept aside and written back as
    they are.
    """
    excludes = [wildcard_to_regex(p) for p in exclude_types]
    result: dict[str, DocumentationTree] = {}

    for module in modules:
        for elem in module.document.iter("member"):
            name = elem.get("name", "")
            try:
                key = parse_member_key(name)
            except ValueError:
                log(LogLevel.WARN, f"Could not parse member name '{name}'")
                module.passthrough.append(elem)
                continue

            if key.type_name not in module.descriptors:
                log(LogLevel.WARN, f"Could not find type '{key.type_name}'")
                module.passthrough.append(elem)
                continue
            if any(rx.match(key.type_name) for rx in excludes):
                log(LogLevel.INFO, f"Excluded type '{key.type_name}'")
                module.passthrough.append(elem)
                continue

            tree = result.get(key.type_name)
            if tree is None:
                tree = DocumentationTree(key.type_name, module=module.name)
                result[key.type_name] = tree
            elif tree.module != module.name:
                log(
                    LogLevel.DEBUG,
                    f"Ignoring '{name}' from {module.name}, "
                    f"already documented by {tree.module}",
                )
                module.passthrough.append(elem)
                continue

            fragment = fragment_from_element(elem)
            if key.kind is MemberKind.TYPE:
                tree.root.root.content.extend(fragment.root.content)
            else:
                tree.add_member(key, fragment)
    return result
