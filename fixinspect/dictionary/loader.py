"""Load QuickFIX-style XML specifications into a FixDictionary.

The expected document layout is the one shipped with QuickFIX::

    <fix type="FIX" major="4" minor="4" servicepack="0">
      <header>
        <field name="BeginString" required="Y"/>
        <group name="NoHops" required="N">
          <field name="HopCompID" required="N"/>
        </group>
      </header>
      <trailer>
        <field name="CheckSum" required="Y"/>
      </trailer>
      <components>...</components>
      <fields>
        <field number="54" name="Side" type="CHAR">
          <value enum="1" description="BUY"/>
        </field>
      </fields>
    </fix>

Example:
    >>> from fixinspect.dictionary.loader import load_dictionary
    >>> dictionary = load_dictionary("spec/FIX44.xml")
    >>> dictionary.field_by_number(35).name
    'MsgType'
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from lxml import etree

from fixinspect.dictionary.provider import FixDictionary
from fixinspect.parsers.exceptions import DictionaryUnavailableError
from fixinspect.parsers.models import FieldDefinition

logger = logging.getLogger(__name__)

# Default location of the protocol specification, relative to the working dir
DEFAULT_DICTIONARY_PATH = Path("spec") / "FIX44.xml"


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def _parse_version(root: etree._Element) -> str:
    major = root.get("major")
    minor = root.get("minor")
    if major is None or minor is None:
        return ""

    version = f"{root.get('type', 'FIX')}.{major}.{minor}"
    servicepack = root.get("servicepack", "0")
    if servicepack not in ("", "0"):
        version += f"SP{servicepack}"
    return version


def _parse_fields(fields_node: etree._Element | None) -> list[FieldDefinition]:
    definitions: list[FieldDefinition] = []
    if fields_node is None:
        return definitions

    for node in fields_node.findall("field"):
        number = node.get("number")
        name = node.get("name")
        if not number or not name:
            logger.debug(f"Skipping field declaration without number or name (line {node.sourceline})")
            continue

        try:
            tag = int(number)
        except ValueError:
            logger.debug(f"Skipping field {name} with invalid number {number!r}")
            continue

        enum_values: dict[str, str] = {}
        for value in node.findall("value"):
            code = value.get("enum")
            if code is None:
                continue
            # First declaration of a code wins
            enum_values.setdefault(code, value.get("description", ""))

        definitions.append(
            FieldDefinition(
                number=tag,
                name=name,
                type=node.get("type", ""),
                enum_values=enum_values,
            )
        )

    return definitions


def _collect_member_names(
    section: etree._Element | None,
    components: dict[str, etree._Element],
    _seen: frozenset[str] = frozenset(),
) -> set[str]:
    """Collect every field and group name declared under a section.

    Nested groups are included and component references are expanded.
    """
    names: set[str] = set()
    if section is None:
        return names

    for node in section.iterdescendants():
        if node.tag in ("field", "group"):
            name = node.get("name")
            if name:
                names.add(name)
        elif node.tag == "component":
            ref = node.get("name")
            if ref and ref in components and ref not in _seen:
                names |= _collect_member_names(components[ref], components, _seen | {ref})

    return names


def parse_dictionary(root: etree._Element) -> FixDictionary:
    """Build a FixDictionary from a parsed ``<fix>`` root element.

    Args:
        root: Root element of the specification document.

    Returns:
        The indexed dictionary.

    Raises:
        DictionaryUnavailableError: If the root is not a ``<fix>`` element or
            declares no fields.
    """
    if root.tag != "fix":
        raise DictionaryUnavailableError(f"Expected <fix> root element, found <{root.tag}>")

    definitions = _parse_fields(root.find("fields"))
    if not definitions:
        raise DictionaryUnavailableError("Specification declares no fields")

    components: dict[str, etree._Element] = {}
    components_node = root.find("components")
    if components_node is not None:
        for component in components_node.findall("component"):
            name = component.get("name")
            if name:
                components[name] = component

    return FixDictionary(
        definitions,
        header_names=_collect_member_names(root.find("header"), components),
        trailer_names=_collect_member_names(root.find("trailer"), components),
        version=_parse_version(root),
    )


def load_dictionary(path: Path | str) -> FixDictionary:
    """Load a QuickFIX XML specification from disk.

    Args:
        path: Path to the XML document.

    Returns:
        The indexed dictionary.

    Raises:
        DictionaryUnavailableError: If the file is missing or cannot be parsed.
    """
    spec_path = Path(path)
    if not spec_path.is_file():
        raise DictionaryUnavailableError(f"FIX specification not found: {spec_path}", path=spec_path)

    try:
        tree = etree.parse(str(spec_path), _make_parser())
    except (OSError, etree.XMLSyntaxError) as e:
        raise DictionaryUnavailableError(
            f"Parsing of XML FIX specification failed: {e}", path=spec_path
        ) from e

    try:
        dictionary = parse_dictionary(tree.getroot())
    except DictionaryUnavailableError as e:
        raise DictionaryUnavailableError(f"{e} ({spec_path})", path=spec_path) from e

    logger.info(f"Loaded FIX dictionary {dictionary.version or '?'} from {spec_path} ({len(dictionary)} fields)")
    return dictionary


def load_dictionary_from_string(document: str | bytes) -> FixDictionary:
    """Load a QuickFIX XML specification held in memory.

    Args:
        document: The XML text.

    Returns:
        The indexed dictionary.

    Raises:
        DictionaryUnavailableError: If the document cannot be parsed.
    """
    if isinstance(document, str):
        document = document.encode("utf-8")
    document = document.strip()

    try:
        root = etree.fromstring(document, _make_parser())
    except etree.XMLSyntaxError as e:
        raise DictionaryUnavailableError(f"Parsing of XML FIX specification failed: {e}") from e

    return parse_dictionary(root)


# ============================================================================
# Module-level cache of loaded dictionaries
# ============================================================================

_dictionaries: dict[Path, FixDictionary] = {}
_dictionaries_lock = threading.Lock()


def get_dictionary(path: Path | str | None = None) -> FixDictionary:
    """Get a loaded dictionary, loading it on first use.

    Args:
        path: Path to the XML specification. Defaults to ``spec/FIX44.xml``.

    Returns:
        The shared FixDictionary for that path.

    Raises:
        DictionaryUnavailableError: If the dictionary cannot be loaded.
    """
    key = Path(path or DEFAULT_DICTIONARY_PATH).resolve()

    with _dictionaries_lock:
        dictionary = _dictionaries.get(key)
        if dictionary is None:
            dictionary = load_dictionary(key)
            _dictionaries[key] = dictionary
        return dictionary


def clear_dictionary_cache() -> None:
    """Forget every cached dictionary."""
    with _dictionaries_lock:
        _dictionaries.clear()
