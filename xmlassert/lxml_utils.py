""" The glue between ``lxml``'s parser and :class:`xmlassert.nodes.Element`. """
import logging
import re
from typing import Dict, List, Union

from lxml import etree

from xmlassert.exceptions import ParseError
from xmlassert.nodes import Element


_encoding_declaration = re.compile(
    r'''\A(\s*<\?xml\b[^>]*?)\s+encoding\s*=\s*(["'])[^"']*\2'''
)


logger = logging.getLogger(__name__)
dbg = logger.debug


def _make_parser(recover: bool = False) -> etree.XMLParser:
    return etree.XMLParser(no_network=True, remove_blank_text=False,
                           resolve_entities=False, recover=recover)


def _only_namespace_errors(error_log) -> bool:
    errors = [x for x in error_log if x.level >= etree.ErrorLevels.ERROR]
    return bool(errors) and all(x.domain == etree.ErrorDomains.NAMESPACE for x in errors)


def parse(text: Union[str, bytes]) -> Element:
    """ Parses an XML document and returns its root element as
        :class:`xmlassert.nodes.Element`. Comments and processing instructions are
        dropped as if they weren't in the source.

        Namespaces aren't processed, hence undeclared prefixes are no error. Only the
        predefined entities and character references are supported, other entity
        references are errors.

        A string is considered to contain decoded characters, thus an ``encoding``
        declaration is ignored. Bytes are decoded as declared by the document, the
        declared encoding must be known to libxml2 by that name, e.g. ``ISO-8859-1``
        rather than ``latin-1``.

        :raises xmlassert.ParseError: If the document isn't well-formed.
    """
    if isinstance(text, str):
        text = _encoding_declaration.sub(r'\1', text, count=1)
    dbg('Parsing document of {} characters.'.format(len(text)))
    try:
        root = etree.fromstring(text, _make_parser())
    except etree.ParseError as e:
        if not _only_namespace_errors(e.error_log):
            dbg('Parsing failed: {}'.format(e))
            raise ParseError(str(e)) from e
        dbg('Reparsing regardless of undeclared namespace prefixes: {}'.format(e))
        root = _parse_recovering(text)
    except ValueError as e:
        dbg('Parsing failed: {}'.format(e))
        raise ParseError(str(e)) from e
    return element_from_lxml(root)


def _parse_recovering(text: Union[str, bytes]) -> etree._Element:
    # the elements and attributes with an undeclared prefix keep it in their name
    try:
        root = etree.fromstring(text, _make_parser(recover=True))
    except (etree.ParseError, ValueError) as e:
        raise ParseError(str(e)) from e
    if root is None:
        raise ParseError('The document has no root element.')
    return root


def element_from_lxml(element: Union[etree._Element, etree._ElementTree]) -> Element:
    """ Converts an ``lxml`` element and its descendants. Namespace prefixes are kept as
        part of the names and namespace declarations become ``xmlns`` attributes.

        :raises xmlassert.ParseError: If the tree contains an unresolved entity
                                      reference.
    """
    if isinstance(element, etree._ElementTree):
        element = element.getroot()
    if not isinstance(element.tag, str):
        raise TypeError('Only elements can be converted, got {!r}.'.format(element))

    content = [element.text or '']
    for child in element:
        if isinstance(child.tag, str):
            content.append(element_from_lxml(child))
            content.append(child.tail or '')
        elif child.tag is etree.Entity:
            raise ParseError("Entity reference '{}' in '{}' is not supported, only the "
                             "predefined entities are.".format(child.text, element.tag))
        else:
            # comments and processing instructions are left out, but the text that
            # follows them is joined with the preceding text
            content[-1] += child.tail or ''

    return Element(qualified_name(element), _attributes(element), content)


def qualified_name(element: etree._Element) -> str:
    """ Returns the element's name with its prefix as it was written in the source. """
    tag = element.tag
    if not tag.startswith('{'):
        # also the case for undeclared prefixes which are part of the tag
        return tag
    localname = tag.split('}', 1)[1]
    if element.prefix:
        return '{}:{}'.format(element.prefix, localname)
    return localname


def _attributes(element: etree._Element) -> Dict[str, str]:
    result = {}

    parent = element.getparent()
    inherited = {} if parent is None else parent.nsmap
    for prefix, namespace in element.nsmap.items():
        if inherited.get(prefix) != namespace:
            result['xmlns' if prefix is None else 'xmlns:' + prefix] = namespace

    for name, value in zip(_attribute_names(element), element.attrib.values()):
        result[name] = value
    return result


def _attribute_names(element: etree._Element) -> List[str]:
    # lxml's attrib only knows the namespace of an attribute, XPath's name() yields
    # the prefix that was used, in the same order
    return [str(element.xpath('name(@*[{}])'.format(i)))
            for i in range(1, len(element.attrib) + 1)]
