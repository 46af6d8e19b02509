""" Test assertions that compare XML documents structurally. Two documents are
    considered equal if they consist of the same elements with the same attributes and
    the same text, optionally disregarding whitespace differences in text. A failing
    comparison reports the location of the first difference.
"""

from importlib.metadata import PackageNotFoundError, version
import logging
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from lxml import etree

from xmlassert.exceptions import ParseError, UsageError, XmlAssertException
from xmlassert.lxml_utils import element_from_lxml, parse
from xmlassert.nodes import Element
from xmlassert.reporters import (LoggingReporter, Outcome, RecordingReporter, Reporter,
                                 TAPReporter)
from xmlassert.utils import normalize_text


# constants


try:
    __version__ = version('xmlassert')
except PackageNotFoundError:
    __version__ = 'unknown'

DEFAULT_DESCRIPTION = 'xml test'


# logging


logger = logging.getLogger(__name__)
""" Module logger, configure as you need. """
dbg = logger.debug
nfo = logger.info


# types


DocumentType = Union[Element, etree._Element, etree._ElementTree, str, bytes]


# options


class Options(NamedTuple):
    """ The configuration of a comparison.

        - ``description`` is the name of the reported test outcome.
        - ``ignore_whitespace`` has the same effect as ``ignore_surrounding_whitespace``
          and ``ignore_different_whitespace`` together.
        - ``ignore_surrounding_whitespace`` ignores leading and trailing whitespace of
          text segments, thus ``<p>foo</p>`` is considered the same as
          ``<p>\\n  foo\\n</p>``.
        - ``ignore_leading_whitespace`` only ignores whitespace at the beginning of text
          segments.
        - ``ignore_trailing_whitespace`` only ignores whitespace at the end of text
          segments.
        - ``ignore_different_whitespace`` considers any run of whitespace characters
          equal to any other, but not to no whitespace at all.
        - ``verbose`` adds a trace of the comparison to the diagnostics.

        None of these affect the comparison of attribute values.
    """
    description: str = DEFAULT_DESCRIPTION
    ignore_whitespace: bool = False
    ignore_leading_whitespace: bool = False
    ignore_trailing_whitespace: bool = False
    ignore_surrounding_whitespace: bool = False
    ignore_different_whitespace: bool = False
    verbose: bool = False

    @classmethod
    def coerce(cls, value: Union['Options', Mapping[str, Any], str, None]) -> 'Options':
        """ Returns an :class:`Options` instance for what can be passed as options to an
            assertion. A mapping is taken as keyword arguments, any other value as
            description.
        """
        if value is None:
            return cls()
        if isinstance(value, Options):
            return value
        if isinstance(value, Mapping):
            options: Dict[str, Any] = dict(value)
            if options.get('description') is None:
                options.pop('description', None)
            unknown = set(options) - set(cls._fields)
            if unknown:
                raise UsageError('Unknown option(s): {}'.format(', '.join(sorted(unknown))))
            return cls(**options)
        return cls(description=str(value))

    @property
    def strips_leading_whitespace(self) -> bool:
        return bool(self.ignore_whitespace or self.ignore_leading_whitespace
                    or self.ignore_surrounding_whitespace)

    @property
    def strips_trailing_whitespace(self) -> bool:
        return bool(self.ignore_whitespace or self.ignore_trailing_whitespace
                    or self.ignore_surrounding_whitespace)

    @property
    def collapses_whitespace(self) -> bool:
        return bool(self.ignore_whitespace or self.ignore_different_whitespace)


OptionsType = Union[Options, Mapping[str, Any], str, None]


# comparison


class SiblingIndex:
    """ Counts the elements per name among a group of siblings to compose locators in
        the manner of XPath, e.g. ``/foo[1]/bar[2]``. Like XPath the counting starts at 1.
    """
    __slots__ = ('_counts',)

    def __init__(self):
        self._counts: Dict[str, int] = {}

    def current(self, name: str) -> int:
        """ The index of the last seen element with the given name, 0 if there was none. """
        return self._counts.get(name, 0)

    def peek(self, name: str) -> int:
        """ The index the next element with the given name will get. """
        return self.current(name) + 1

    def next_index(self, name: str) -> int:
        """ Counts an occurrence of an element with the given name and returns its
            index. """
        index = self._counts[name] = self.peek(name)
        return index


class TreeComparator:
    """ Compares two element trees in document order and stops at the first difference.
        The diagnostic lines that describe it are collected in ``diagnostics``, as well as
        a trace of the comparison if the ``verbose`` option is set.
    """
    __slots__ = ('options', 'diagnostics')

    def __init__(self, options: OptionsType = None) -> None:
        self.options = Options.coerce(options)
        self.diagnostics: List[str] = []

    def compare(self, got: Element, expected: Optional[Element], path: str = '',
                index: SiblingIndex = None) -> bool:
        """ Compares ``got`` against ``expected``, both located below ``path``. ``index``
            keeps count of the siblings that were compared before.
        """
        if index is None:
            index = SiblingIndex()

        got_name = got.name

        if expected is None:
            return self._fail("Element '{}/{}[{}]' was not expected"
                              .format(path, got_name, index.peek(got_name)))

        expected_name = expected.name
        expected_index = index.peek(expected_name)
        got_index = index.next_index(got_name)

        self._trace("comparing '{0}/{1}[{2}]' to '{0}/{3}[{4}]'..."
                    .format(path, got_name, got_index, expected_name, expected_index))

        if got_name != expected_name:
            return self._fail("Element '{0}/{1}[{2}]' does not match '{0}/{3}[{4}]'"
                              .format(path, got_name, got_index, expected_name,
                                      expected_index))
        self._trace('...matched name')

        path += '/{}[{}]'.format(got_name, got_index)
        return (self._compare_attributes(got, expected, path)
                and self._compare_content(got, expected, path))

    def _compare_attributes(self, got: Element, expected: Element, path: str) -> bool:
        # a copy to track which attributes were matched
        got_attributes = dict(got.attributes)

        for name in sorted(expected.attributes):
            self._trace("checking attribute '{}/@{}'...".format(path, name))

            if name not in got_attributes:
                return self._fail("expected attribute '{}/@{}' not found".format(path, name))
            self._trace('...found attribute')

            got_value = got_attributes.pop(name)
            expected_value = expected.attributes[name]
            if got_value != expected_value:
                return self._fail(
                    "attribute value for '{}/@{}' didn't match".format(path, name),
                    'found value:', "  '{}'".format(got_value),
                    'expected value:', "  '{}'".format(expected_value)
                )
            self._trace('...the attribute contents matched')

        if got_attributes:
            return self._fail(
                'found extra unexpected attribute{}:'
                .format('s' if len(got_attributes) > 1 else ''),
                *("  '{}/@{}'".format(path, x) for x in sorted(got_attributes))
            )
        self._trace('the attributes all matched')
        return True

    def _compare_content(self, got: Element, expected: Element, path: str) -> bool:
        # the children get their own index, distinct from the one that counts got and
        # its siblings
        child_index = SiblingIndex()
        got_content, expected_content = got.content, expected.content

        # text and elements alternate, hence the steps of two
        for position in range(0, len(got_content), 2):
            got_text = got_content[position]
            expected_text = expected_content[position]
            compared_got_text = normalize_text(got_text, self.options)
            compared_expected_text = normalize_text(expected_text, self.options)

            if compared_got_text != compared_expected_text:
                return self._fail(
                    self._text_locator(got_content, expected_content, position, path,
                                       child_index),
                    'found:', "  '{}'".format(got_text),
                    'expected:', "  '{}'".format(expected_text),
                    *(self._verbose_lines(
                        'compared found text:', "  '{}'".format(compared_got_text),
                        'against text:', "  '{}'".format(compared_expected_text)
                    ))
                )

            position += 1
            if position >= len(got_content):
                break

            # a missing expected element is handled by the recursive call
            expected_child = (expected_content[position]
                              if position < len(expected_content) else None)
            if not self.compare(got_content[position], expected_child, path, child_index):
                return False

        if len(expected_content) > len(got_content):
            name = expected_content[len(got_content)].name
            return self._fail("Couldn't find expected node '{}/{}[{}]'"
                              .format(path, name, child_index.peek(name)))

        return True

    @staticmethod
    def _text_locator(got_content, expected_content, position: int, path: str,
                      child_index: SiblingIndex) -> str:
        if position == 0:
            if len(got_content) == 1 and len(expected_content) == 1:
                return "text inside '{}' didn't match".format(path)
            return "text immediately inside opening tag of '{}' didn't match".format(path)
        elif position == len(got_content) - 1 == len(expected_content) - 1:
            return "text immediately before closing tag of '{}' didn't match".format(path)
        else:
            name = got_content[position - 1].name
            return "text immediately after '{}/{}[{}]' didn't match".format(
                path, name, child_index.current(name))

    def _fail(self, *lines: str) -> bool:
        for line in lines:
            dbg(line)
        self.diagnostics.extend(lines)
        return False

    def _trace(self, line: str) -> None:
        if self.options.verbose:
            dbg(line)
            self.diagnostics.append(line)

    def _verbose_lines(self, *lines: str) -> Tuple[str, ...]:
        return lines if self.options.verbose else ()


def compare(got: Element, expected: Element,
            options: OptionsType = None) -> Tuple[bool, Tuple[str, ...]]:
    """ Compares two element trees and returns whether they are equal along with the
        diagnostic lines.
    """
    comparator = TreeComparator(options)
    result = comparator.compare(got, expected)
    return result, tuple(comparator.diagnostics)


# assertions


def _as_element(document: DocumentType) -> Element:
    if isinstance(document, Element):
        return document
    if isinstance(document, (etree._Element, etree._ElementTree)):
        return element_from_lxml(document)
    if isinstance(document, (str, bytes)):
        return parse(document)
    raise UsageError('A document must be given as string, bytes or element, got {!r}.'
                     .format(type(document)))


def _as_submitted_element(document: Any) -> Element:
    # the document under test may be anything, what isn't a document fails the test
    try:
        return _as_element(document)
    except UsageError as e:
        raise ParseError(str(e)) from e


def _parse_failure_diagnostics(error: ParseError) -> Tuple[str, ...]:
    return "Couldn't parse submitted XML document:", '  {}'.format(error.message)


class XmlAssertions:
    """ The assertions bound to the :class:`xmlassert.reporters.Reporter` that receives
        their outcomes. Each assertion reports exactly one outcome and returns ``True``
        if it passed, ``None`` otherwise.

        Documents can be passed as :class:`xmlassert.nodes.Element`, as ``lxml`` element
        or tree, or as string or bytes that are parsed. Malformed documents under test
        are reported as failures, while a malformed expected document raises a
        :class:`xmlassert.UsageError`.
    """
    __slots__ = ('reporter',)

    def __init__(self, reporter: Reporter) -> None:
        self.reporter = reporter

    def is_xml(self, got: DocumentType, expected: DocumentType,
               options: OptionsType = None) -> Optional[bool]:
        """ Passes if ``got`` is structurally equal to ``expected``. ``options`` can be
            given as :class:`Options`, as mapping of its fields or as description
            string.
        """
        options, expected = self._prepare(expected, options)
        try:
            got = _as_submitted_element(got)
        except ParseError as e:
            return self._report(False, options.description, _parse_failure_diagnostics(e))

        comparator = TreeComparator(options)
        result = comparator.compare(got, expected)
        return self._report(result, options.description, comparator.diagnostics)

    def isnt_xml(self, got: DocumentType, expected: DocumentType,
                 options: OptionsType = None) -> Optional[bool]:
        """ Passes if ``got`` is structurally different from ``expected``. Takes the
            same options as :meth:`is_xml`.
        """
        options, expected = self._prepare(expected, options)
        try:
            got = _as_submitted_element(got)
        except ParseError as e:
            return self._report(False, options.description, _parse_failure_diagnostics(e))

        comparator = TreeComparator(options)
        if comparator.compare(got, expected):
            return self._report(
                False, options.description,
                comparator.diagnostics + ['the submitted XML document matched the expected one']
            )
        return self._report(True, options.description,
                            comparator.diagnostics if options.verbose else ())

    def is_well_formed_xml(self, text: Union[str, bytes],
                           description: str = None) -> Optional[bool]:
        """ Passes if ``text`` contains a well-formed XML document. """
        description = self._description(description)
        try:
            parse(self._text(text))
        except ParseError as e:
            return self._report(False, description, _parse_failure_diagnostics(e))
        return self._report(True, description)

    def isnt_well_formed_xml(self, text: Union[str, bytes],
                             description: str = None) -> Optional[bool]:
        """ Passes if ``text`` doesn't contain a well-formed XML document. """
        description = self._description(description)
        try:
            parse(self._text(text))
        except ParseError as e:
            dbg('Not well-formed as expected: {}'.format(e.message))
            return self._report(True, description)
        return self._report(False, description,
                            ('the submitted XML document is well formed',))

    @staticmethod
    def _prepare(expected: DocumentType, options: OptionsType) -> Tuple[Options, Element]:
        if expected is None:
            raise UsageError('expected argument must be defined')
        options = Options.coerce(options)
        dbg('Using options: {}'.format(options))
        try:
            expected = _as_element(expected)
        except ParseError as e:
            raise UsageError("Couldn't parse expected XML document: {}"
                             .format(e.message)) from e
        return options, expected

    @staticmethod
    def _description(description: Optional[str]) -> str:
        return DEFAULT_DESCRIPTION if description is None else str(description)

    @staticmethod
    def _text(text: Any) -> Union[str, bytes]:
        if not isinstance(text, (str, bytes)):
            raise UsageError('A document must be given as string or bytes, got {!r}.'
                             .format(type(text)))
        return text

    def _report(self, passed: bool, description: str, diagnostics=()) -> Optional[bool]:
        outcome = Outcome(passed, description, tuple(diagnostics))
        nfo('{} {!r}.'.format('Passed' if passed else 'Failed', description))
        self.reporter.report(outcome)
        return True if passed else None


default_reporter: Reporter = LoggingReporter()
""" The reporter that the module level assertion functions use unless one is passed. """


def _assertions(reporter: Optional[Reporter]) -> XmlAssertions:
    return XmlAssertions(default_reporter if reporter is None else reporter)


def is_xml(got: DocumentType, expected: DocumentType, options: OptionsType = None, *,
           reporter: Reporter = None) -> Optional[bool]:
    """ See :meth:`XmlAssertions.is_xml`. """
    return _assertions(reporter).is_xml(got, expected, options)


def isnt_xml(got: DocumentType, expected: DocumentType, options: OptionsType = None, *,
             reporter: Reporter = None) -> Optional[bool]:
    """ See :meth:`XmlAssertions.isnt_xml`. """
    return _assertions(reporter).isnt_xml(got, expected, options)


def is_well_formed_xml(text: Union[str, bytes], description: str = None, *,
                       reporter: Reporter = None) -> Optional[bool]:
    """ See :meth:`XmlAssertions.is_well_formed_xml`. """
    return _assertions(reporter).is_well_formed_xml(text, description)


def isnt_well_formed_xml(text: Union[str, bytes], description: str = None, *,
                         reporter: Reporter = None) -> Optional[bool]:
    """ See :meth:`XmlAssertions.isnt_well_formed_xml`. """
    return _assertions(reporter).isnt_well_formed_xml(text, description)


__all__ = [
    '__version__', 'logger', 'default_reporter', 'DEFAULT_DESCRIPTION',
    XmlAssertException.__name__, ParseError.__name__, UsageError.__name__,
    Element.__name__, Options.__name__, Outcome.__name__,
    Reporter.__name__, LoggingReporter.__name__, RecordingReporter.__name__,
    TAPReporter.__name__,
    SiblingIndex.__name__, TreeComparator.__name__, XmlAssertions.__name__,
    'compare', 'element_from_lxml', 'parse',
    'is_xml', 'isnt_xml', 'is_well_formed_xml', 'isnt_well_formed_xml',
]
